# floodguard/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class RiskConfig(BaseModel):
    river_search_radius_km: float = 10.0
    distance_override_km: float | None = 5.0      # None이면 거리 오버라이드 비활성

class RoadConfig(BaseModel):
    reading_radius_km: float = 5.0                # 도로 끝점 주변 측정값 조회 반경

class RoutingConfig(BaseModel):
    area_buffer_factor: float = 1.5
    connector_max_km: float = 10.0

class StorageConfig(BaseModel):
    backend: str = "memory"                       # memory | sqlite
    db_path: str = "/data/floodguard.db"
    seed: bool = True

class AlertConfig(BaseModel):
    enabled: bool = True
    webhook_url: str = ""                         # 비어 있으면 로그만 남김
    timeout_sec: int = 5
    max_retries: int = 3
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 10.0

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "FloodGuard"
    build_version: str = "0.1.0"
    build_date: str = "2026-10-01"
    log_level: str = "INFO"
    log_json: bool = False                        # 한 줄 JSON 로그

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    roads: RoadConfig = Field(default_factory=RoadConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    alerts: AlertConfig = Field(default_factory=AlertConfig)
    observability: Observability = Field(default_factory=Observability)
