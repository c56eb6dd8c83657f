"""
FastAPI routes for FloodGuard.

Coordinates are validated here at the boundary; the core assumes
well-typed, in-range floats. User identity is supplied by the caller
(authentication is handled upstream).
"""

from typing import List, Optional
from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from floodguard.core.models import (
    Alert, FloodRiskRecord, Recipient, RiskAssessment, RiverReading, RoadSegment,
    RouteSummary,
)
from floodguard.core.routing import safe_only_view
from floodguard.core.road_status import road_status_color
from floodguard.errors import ForbiddenError, NotFoundError, StoreError
from floodguard.features.flood_service import CheckInResult, FloodService
from floodguard.observability.logging_setup import get_logger

log = get_logger("floodguard.api")

def _lat():
    return Query(..., ge=-90, le=90)

def _lon():
    return Query(..., ge=-180, le=180)

class RoadStatusResponse(BaseModel):
    status: str
    color: str

class LocationCheckIn(BaseModel):
    """위치 체크인 요청 본문"""
    model_config = ConfigDict(populate_by_name=True)

    user: Recipient
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

class ManualAlertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: Recipient
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

def build_router(service: FloodService) -> APIRouter:
    """도메인 API 라우터를 생성합니다."""
    router = APIRouter(prefix="/api")

    async def _guard(coro):
        # 저장소 오류는 503, 없는 레코드는 404, 소유자 불일치는 403
        try:
            return await coro
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ForbiddenError as e:
            raise HTTPException(status_code=403, detail=str(e))
        except StoreError as e:
            log.error(f"저장소 오류: {e}")
            raise HTTPException(status_code=503, detail="Store unavailable")

    @router.get("/flood-risk", response_model=RiskAssessment)
    async def flood_risk(latitude: float = _lat(), longitude: float = _lon()):
        """지점 홍수 위험 평가"""
        return await _guard(service.assess_flood_risk(latitude, longitude))

    @router.get("/road-status", response_model=RoadStatusResponse)
    async def road_status(startLat: float = _lat(), startLong: float = _lon(),
                          endLat: float = _lat(), endLong: float = _lon()):
        """도로 구간 상태 평가 (저장하지 않음)"""
        status = await _guard(service.assess_road_status(startLat, startLong, endLat, endLong))
        return RoadStatusResponse(status=status.value, color=road_status_color(status))

    @router.get("/safe-routes", response_model=RouteSummary)
    async def safe_routes(startLat: float = _lat(), startLong: float = _lon(),
                          endLat: float = _lat(), endLong: float = _lon(),
                          safeOnly: bool = False):
        """우선순위 경로 목록. safeOnly=true이면 표시용 필터 적용"""
        summary = await _guard(service.get_safe_routes(startLat, startLong, endLat, endLong))
        if safeOnly:
            summary = summary.model_copy(update={"routes": safe_only_view(summary.routes)})
        return summary

    @router.get("/roads", response_model=List[RoadSegment])
    async def roads(latitude: float = _lat(), longitude: float = _lon(),
                    radius: float = Query(..., gt=0)):
        """영역 도로 조회 (최신 수위로 상태 갱신 후 반환)"""
        return await _guard(service.refresh_roads(latitude, longitude, radius))

    @router.get("/river-levels", response_model=List[RiverReading])
    async def river_levels(latitude: float = _lat(), longitude: float = _lon(),
                           radius: float = Query(..., gt=0)):
        return await _guard(service.river_levels(latitude, longitude, radius))

    @router.post("/locations", response_model=CheckInResult, status_code=201)
    async def check_in(payload: LocationCheckIn):
        """위치 체크인 (평가, 이력 기록, 경보)"""
        return await _guard(service.check_location(payload.user, payload.latitude, payload.longitude))

    @router.post("/alerts/send", response_model=Alert, status_code=201)
    async def send_alert(payload: ManualAlertRequest):
        """수동 경보"""
        return await _guard(service.send_manual_alert(payload.user, payload.latitude, payload.longitude))

    @router.get("/alerts", response_model=List[Alert])
    async def alerts(userId: int = Query(...)):
        return await _guard(service.list_alerts(userId))

    @router.post("/alerts/{alert_id}/read", response_model=Alert)
    async def read_alert(alert_id: int, userId: int = Body(..., embed=True)):
        return await _guard(service.mark_alert_read(userId, alert_id))

    @router.get("/flood-risks/history", response_model=List[FloodRiskRecord])
    async def history(userId: int = Query(...)):
        return await _guard(service.risk_history(userId))

    @router.get("/flood-risks/current", response_model=FloodRiskRecord)
    async def current(userId: int = Query(...)):
        latest = await _guard(service.latest_risk(userId))
        if latest is None:
            raise HTTPException(status_code=404, detail="No flood risk data available")
        return latest

    return router
