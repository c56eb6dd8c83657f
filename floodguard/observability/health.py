"""
HTTP endpoints for FloodGuard.

This module implements health, readiness, metrics, and info endpoints
for monitoring and operational visibility, and mounts the domain API.
"""

import time
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from floodguard.api.routes import build_router
from floodguard.errors import StoreError
from floodguard.features.flood_service import FloodService
from floodguard.observability.logging_setup import get_logger
from floodguard.settings import Settings

log = get_logger("floodguard.http")

def create_app(settings: Settings, service: FloodService) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="FloodGuard flood risk and safe routing service"
    )
    
    start_time = time.time()
    
    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })
    
    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트 (저장소 조회 가능 여부)"""
        try:
            await service.river_levels(0.0, 0.0, 1.0)
        except StoreError as e:
            log.warning(f"레디니스 실패: {e}")
            return JSONResponse({
                "status": "not_ready",
                "service": settings.observability.service_name,
                "timestamp": time.time()
            }, status_code=503)
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })
    
    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
    
    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "distance_override_km": settings.risk.distance_override_km,
            "storage_backend": settings.storage.backend
        })
    
    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "flood_risk": "/api/flood-risk",
                "road_status": "/api/road-status",
                "safe_routes": "/api/safe-routes",
                "roads": "/api/roads",
                "river_levels": "/api/river-levels"
            }
        })
    
    app.include_router(build_router(service))
    
    return app
