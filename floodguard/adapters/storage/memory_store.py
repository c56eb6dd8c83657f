"""
In-memory store for FloodGuard.

Implements every storage port on plain dicts. Used for development,
demos and tests; contents are lost on restart.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from floodguard.common.geo import within_degree_box
from floodguard.core.models import (
    Alert, FloodRiskRecord, RiskLevel, RiverReading, RoadSegment, RoadStatus,
)
from floodguard.errors import NotFoundError
from floodguard.observability.logging_setup import get_logger
from . import seed

log = get_logger("floodguard.store.memory")

def _now() -> datetime:
    return datetime.now(timezone.utc)

class InMemoryFloodStore:
    """메모리 기반 저장소"""
    
    def __init__(self, *, seed_data: bool = True):
        self._rivers: Dict[int, RiverReading] = {}
        self._roads: Dict[int, RoadSegment] = {}
        self._risks: Dict[int, FloodRiskRecord] = {}
        self._alerts: Dict[int, Alert] = {}
        self._ids = {"river": 0, "road": 0, "risk": 0, "alert": 0}
        
        if seed_data:
            self._seed()
            log.info(f"메모리 저장소 시드 완료 rivers:{len(self._rivers)} roads:{len(self._roads)}")
    
    def _next_id(self, kind: str) -> int:
        self._ids[kind] += 1
        return self._ids[kind]
    
    def _seed(self) -> None:
        for lat, lon, level, threshold in seed.RIVER_LEVELS:
            self.add_river_level(lat, lon, level, threshold)
        for name, slat, slon, elat, elon, status, dist in seed.ROADS:
            self.add_road(name, slat, slon, elat, elon, status, dist)
    
    # ---- 하천 수위 ----
    
    def add_river_level(self, latitude: float, longitude: float, level: float,
                        critical_threshold: Optional[float] = None) -> RiverReading:
        reading = RiverReading(
            id=self._next_id("river"),
            latitude=latitude,
            longitude=longitude,
            level=level,
            critical_threshold=critical_threshold,
            timestamp=_now(),
        )
        self._rivers[reading.id] = reading
        return reading
    
    async def get_river_levels_by_area(self, latitude: float, longitude: float,
                                       radius_km: float) -> List[RiverReading]:
        return [
            r for r in self._rivers.values()
            if within_degree_box(r.latitude, r.longitude, latitude, longitude, radius_km)
        ]
    
    async def update_river_level(self, reading_id: int, level: float) -> RiverReading:
        existing = self._rivers.get(reading_id)
        if existing is None:
            raise NotFoundError("river_level", reading_id)
        updated = existing.model_copy(update={"level": level, "timestamp": _now()})
        self._rivers[reading_id] = updated
        return updated
    
    # ---- 도로 ----
    
    def add_road(self, name: str, start_lat: float, start_long: float,
                 end_lat: float, end_long: float,
                 status: RoadStatus = RoadStatus.SAFE,
                 distance: Optional[float] = None) -> RoadSegment:
        road = RoadSegment(
            id=self._next_id("road"),
            name=name,
            start_lat=start_lat,
            start_long=start_long,
            end_lat=end_lat,
            end_long=end_long,
            status=status,
            distance=distance,
            last_updated=_now(),
        )
        self._roads[road.id] = road
        return road
    
    async def get_roads_by_area(self, latitude: float, longitude: float,
                                radius_km: float) -> List[RoadSegment]:
        return [
            r for r in self._roads.values()
            if within_degree_box(r.start_lat, r.start_long, latitude, longitude, radius_km)
            or within_degree_box(r.end_lat, r.end_long, latitude, longitude, radius_km)
        ]
    
    async def update_road_status(self, road_id: int, status: RoadStatus) -> RoadSegment:
        existing = self._roads.get(road_id)
        if existing is None:
            raise NotFoundError("road", road_id)
        updated = existing.model_copy(update={"status": status, "last_updated": _now()})
        self._roads[road_id] = updated
        return updated
    
    # ---- 위험 평가 이력 ----
    
    async def add_flood_risk(self, user_id: int, latitude: float, longitude: float,
                             risk_level: RiskLevel, water_level: Optional[float],
                             threshold_level: Optional[float]) -> FloodRiskRecord:
        record = FloodRiskRecord(
            id=self._next_id("risk"),
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            risk_level=risk_level,
            water_level=water_level,
            threshold_level=threshold_level,
            timestamp=_now(),
        )
        self._risks[record.id] = record
        return record
    
    async def get_flood_risks_by_user(self, user_id: int) -> List[FloodRiskRecord]:
        rows = [r for r in self._risks.values() if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.id, reverse=True)
    
    # ---- 경보 ----
    
    async def add_alert(self, user_id: int, risk_level: RiskLevel, message: str) -> Alert:
        alert = Alert(
            id=self._next_id("alert"),
            user_id=user_id,
            risk_level=risk_level,
            message=message,
            is_read=False,
            created_at=_now(),
        )
        self._alerts[alert.id] = alert
        return alert
    
    async def get_alerts_by_user(self, user_id: int) -> List[Alert]:
        rows = [a for a in self._alerts.values() if a.user_id == user_id]
        return sorted(rows, key=lambda a: a.id, reverse=True)
    
    async def get_alert(self, alert_id: int) -> Alert:
        alert = self._alerts.get(alert_id)
        if alert is None:
            raise NotFoundError("alert", alert_id)
        return alert
    
    async def mark_alert_read(self, alert_id: int) -> Alert:
        existing = await self.get_alert(alert_id)
        updated = existing.model_copy(update={"is_read": True})
        self._alerts[alert_id] = updated
        return updated
