"""
Flood service facade for FloodGuard.

This module wires the assessor, road status service and route
composer onto one store, and implements the check-in alert flow:
assess -> record history -> create alert for MEDIUM/HIGH -> dispatch.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from floodguard.core.models import (
    Alert, Coordinate, FloodRiskRecord, Recipient, RiskAssessment, RiskLevel,
    RiverReading, RoadSegment, RoadStatus, RouteSummary,
)
from floodguard.errors import DispatchError, ForbiddenError
from floodguard.features.assessor import FloodRiskAssessor
from floodguard.features.road_status import RoadStatusService
from floodguard.features.route_composer import RouteComposer
from floodguard.observability import metrics
from floodguard.observability.logging_setup import get_logger, with_context
from floodguard.ports.dispatch import AlertDispatchPort
from floodguard.ports.stores import FloodStorePort
from floodguard.settings import Settings

log = get_logger("floodguard.service")

# 경보를 만드는 위험 수준
ALERT_LEVELS = (RiskLevel.HIGH, RiskLevel.MEDIUM)

# 위치 정보가 전혀 없을 때 쓰는 기본 좌표 (위도, 경도)
DEFAULT_LOCATION = (16.6950, 74.2314)

class CheckInResult(BaseModel):
    """위치 체크인 결과"""
    model_config = ConfigDict(populate_by_name=True)

    assessment: RiskAssessment
    record: FloodRiskRecord
    alert: Optional[Alert] = None
    dispatched: bool = False

def alert_message(assessment: RiskAssessment) -> str:
    return (f"Flood risk in your area is {assessment.risk_level.value}. "
            f"Current water level: {assessment.water_level}m "
            f"(threshold: {assessment.threshold_level}m)")

class FloodService:
    """홍수 위험/도로/경로 서비스"""

    def __init__(self,
                 store: FloodStorePort,
                 dispatcher: AlertDispatchPort,
                 settings: Optional[Settings] = None):
        """
        초기화합니다.

        Args:
            store: 저장소 (모든 저장소 포트 구현)
            dispatcher: 경보 발송 포트
            settings: 애플리케이션 설정
        """
        self.settings = settings or Settings()
        self.store = store
        self.dispatcher = dispatcher

        self.assessor = FloodRiskAssessor(
            store,
            search_radius_km=self.settings.risk.river_search_radius_km,
            distance_override_km=self.settings.risk.distance_override_km,
        )
        self.road_status = RoadStatusService(
            store, store, reading_radius_km=self.settings.roads.reading_radius_km
        )
        self.composer = RouteComposer(
            store,
            buffer_factor=self.settings.routing.area_buffer_factor,
            connector_max_km=self.settings.routing.connector_max_km,
        )

    # ---- 핵심 연산 ----

    async def assess_flood_risk(self, latitude: float, longitude: float) -> RiskAssessment:
        return await self.assessor.assess(latitude, longitude)

    async def assess_road_status(self, start_lat: float, start_long: float,
                                 end_lat: float, end_long: float) -> RoadStatus:
        return await self.road_status.assess(
            Coordinate(latitude=start_lat, longitude=start_long),
            Coordinate(latitude=end_lat, longitude=end_long),
        )

    async def get_safe_routes(self, start_lat: float, start_long: float,
                              end_lat: float, end_long: float) -> RouteSummary:
        return await self.composer.compose(
            Coordinate(latitude=start_lat, longitude=start_long),
            Coordinate(latitude=end_lat, longitude=end_long),
        )

    async def refresh_roads(self, latitude: float, longitude: float,
                            radius_km: float) -> List[RoadSegment]:
        return await self.road_status.refresh_area(latitude, longitude, radius_km)

    async def river_levels(self, latitude: float, longitude: float,
                           radius_km: float) -> List[RiverReading]:
        return await self.store.get_river_levels_by_area(latitude, longitude, radius_km)

    # ---- 경보 흐름 ----

    async def _dispatch(self, recipient: Recipient, assessment: RiskAssessment,
                        location: Coordinate) -> bool:
        """발송 실패는 기록만 하고 호출자에게 전파하지 않습니다."""
        if not self.settings.alerts.enabled or not recipient.receive_alerts:
            log.info(f"경보 발송 비활성 user:{recipient.id}")
            return False
        try:
            await self.dispatcher.send_flood_alert(recipient, assessment, location)
        except DispatchError as e:
            metrics.alerts_dispatched.labels(outcome="failed").inc()
            log.error(f"경보 발송 실패 user:{recipient.id} error:{e}")
            return False
        metrics.alerts_dispatched.labels(outcome="sent").inc()
        return True

    async def check_location(self, recipient: Recipient,
                             latitude: float, longitude: float) -> CheckInResult:
        """
        위치 체크인을 처리합니다.

        평가 결과를 이력에 남기고, MEDIUM/HIGH이면 경보 레코드를 만들고
        사용자가 수신 동의했으면 발송합니다.
        """
        with with_context(user_id=recipient.id):
            assessment = await self.assess_flood_risk(latitude, longitude)
            record = await self.store.add_flood_risk(
                recipient.id, latitude, longitude,
                assessment.risk_level, assessment.water_level, assessment.threshold_level,
            )

            if assessment.risk_level not in ALERT_LEVELS:
                return CheckInResult(assessment=assessment, record=record)

            alert = await self.store.add_alert(recipient.id, assessment.risk_level, alert_message(assessment))
            metrics.alerts_created.labels(level=assessment.risk_level.value).inc()
            log.info(f"경보 생성 alert:{alert.id} level:{assessment.risk_level.value}")
            dispatched = await self._dispatch(
                recipient, assessment, Coordinate(latitude=latitude, longitude=longitude)
            )
            return CheckInResult(assessment=assessment, record=record, alert=alert, dispatched=dispatched)

    async def send_manual_alert(self, recipient: Recipient,
                                latitude: Optional[float] = None,
                                longitude: Optional[float] = None) -> Alert:
        """
        수동 경보를 만듭니다.

        위치가 없으면 마지막으로 평가한 위치를 사용합니다.
        위험 수준과 무관하게 경보 레코드를 남깁니다.
        """
        if latitude is None or longitude is None:
            history = await self.store.get_flood_risks_by_user(recipient.id)
            if history:
                latitude, longitude = history[0].latitude, history[0].longitude
                log.info(f"마지막 위치 사용 user:{recipient.id} lat:{latitude} lon:{longitude}")
            else:
                latitude, longitude = DEFAULT_LOCATION
                log.info(f"기본 위치 사용 user:{recipient.id} lat:{latitude} lon:{longitude}")

        assessment = await self.assess_flood_risk(latitude, longitude)
        await self._dispatch(recipient, assessment, Coordinate(latitude=latitude, longitude=longitude))

        alert = await self.store.add_alert(
            recipient.id, assessment.risk_level,
            f"Manual flood risk alert: {assessment.risk_level.value} risk level detected at your location.",
        )
        metrics.alerts_created.labels(level=assessment.risk_level.value).inc()
        return alert

    async def list_alerts(self, user_id: int) -> List[Alert]:
        return await self.store.get_alerts_by_user(user_id)

    async def mark_alert_read(self, user_id: int, alert_id: int) -> Alert:
        alert = await self.store.get_alert(alert_id)
        if alert.user_id != user_id:
            raise ForbiddenError(f"alert {alert_id} belongs to another user")
        return await self.store.mark_alert_read(alert_id)

    async def risk_history(self, user_id: int) -> List[FloodRiskRecord]:
        return await self.store.get_flood_risks_by_user(user_id)

    async def latest_risk(self, user_id: int) -> Optional[FloodRiskRecord]:
        history = await self.store.get_flood_risks_by_user(user_id)
        return history[0] if history else None
