# floodguard/main.py
import asyncio
import os
from typing import Optional
import uvicorn
from floodguard.adapters.dispatch import LogAlertDispatcher, WebhookAlertDispatcher
from floodguard.adapters.storage import InMemoryFloodStore, SQLiteFloodStore
from floodguard.features.flood_service import FloodService
from floodguard.observability.health import create_app
from floodguard.observability.logging_setup import configure_logging, get_logger
from floodguard.settings import Settings

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1", "true", "yes", "on")

def _opt_float(name: str, default: Optional[float]) -> Optional[float]:
    # "off"/"none"/빈 값이면 비활성
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in ("", "off", "none", "disabled"):
        return None
    return float(raw)

def build_settings() -> Settings:
    s = Settings()

    # 위험 평가
    s.risk.river_search_radius_km = float(os.getenv("RIVER_SEARCH_RADIUS_KM", s.risk.river_search_radius_km))
    s.risk.distance_override_km = _opt_float("DISTANCE_OVERRIDE_KM", s.risk.distance_override_km)
    s.roads.reading_radius_km = float(os.getenv("ROAD_READING_RADIUS_KM", s.roads.reading_radius_km))

    # 경로
    s.routing.area_buffer_factor = float(os.getenv("ROUTE_BUFFER_FACTOR", s.routing.area_buffer_factor))
    s.routing.connector_max_km = float(os.getenv("CONNECTOR_MAX_KM", s.routing.connector_max_km))

    # 저장소
    s.storage.backend = os.getenv("STORAGE_BACKEND", s.storage.backend)
    s.storage.db_path = os.getenv("DB_PATH", s.storage.db_path)
    s.storage.seed = _b("SEED_DATA", s.storage.seed)

    # 경보
    s.alerts.enabled = _b("ALERTS_ENABLED", s.alerts.enabled)
    s.alerts.webhook_url = os.getenv("ALERT_WEBHOOK_URL", s.alerts.webhook_url)
    s.alerts.timeout_sec = int(os.getenv("ALERT_TIMEOUT_SEC", s.alerts.timeout_sec))
    s.alerts.max_retries = int(os.getenv("ALERT_MAX_RETRIES", s.alerts.max_retries))

    # 관측성
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

async def build_store(s: Settings):
    if s.storage.backend == "sqlite":
        store = SQLiteFloodStore(s.storage.db_path)
        await store.init(seed_data=s.storage.seed)
        return store
    if s.storage.backend != "memory":
        raise ValueError(f"unknown storage backend: {s.storage.backend}")
    return InMemoryFloodStore(seed_data=s.storage.seed)

def build_dispatcher(s: Settings):
    if not s.alerts.webhook_url:
        return LogAlertDispatcher()
    return WebhookAlertDispatcher(
        s.alerts.webhook_url,
        timeout=s.alerts.timeout_sec,
        max_retries=s.alerts.max_retries,
        backoff_initial=s.alerts.backoff_initial_sec,
        backoff_max=s.alerts.backoff_max_sec,
    )

async def main():
    s = build_settings()
    configure_logging(s.observability.log_level, json_output=s.observability.log_json)
    log = get_logger()
    log.info("설정 로드 완료")

    store = await build_store(s)
    log.info(f"저장소 준비 완료 backend:{s.storage.backend}")

    dispatcher = build_dispatcher(s)
    service = FloodService(store, dispatcher, s)
    app = create_app(s, service)

    server = uvicorn.Server(
        uvicorn.Config(app, host="0.0.0.0", port=s.observability.http_port,
                       log_level=s.observability.log_level.lower())
    )
    try:
        await server.serve()
    finally:
        if isinstance(dispatcher, WebhookAlertDispatcher):
            await dispatcher.close()
        log.info("서비스 종료")

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
