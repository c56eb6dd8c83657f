"""
Road status evaluation with write-back for FloodGuard.

Re-classifies road segments against the latest river readings and
persists any status that changed. Road status is a derived cache, so
concurrent refreshes of the same road are last-write-wins.
"""

from typing import List
from floodguard.core.models import Coordinate, RiverReading, RoadSegment, RoadStatus
from floodguard.core.road_status import classify_road
from floodguard.observability import metrics
from floodguard.observability.logging_setup import get_logger
from floodguard.ports.stores import RiverLevelStorePort, RoadStorePort

log = get_logger("floodguard.roads")

class RoadStatusService:
    """도로 상태 평가 및 갱신 서비스"""

    def __init__(self,
                 rivers: RiverLevelStorePort,
                 roads: RoadStorePort,
                 *,
                 reading_radius_km: float = 5.0):
        self.rivers = rivers
        self.roads = roads
        self.reading_radius_km = reading_radius_km

    async def nearby_readings(self, start: Coordinate, end: Coordinate) -> List[RiverReading]:
        """양 끝점 주변 측정값 (시작점 주변 다음 끝점 주변, 중복 제거)"""
        around_start = await self.rivers.get_river_levels_by_area(
            start.latitude, start.longitude, self.reading_radius_km)
        around_end = await self.rivers.get_river_levels_by_area(
            end.latitude, end.longitude, self.reading_radius_km)

        seen = set()
        readings: List[RiverReading] = []
        for reading in around_start + around_end:
            if reading.id in seen:
                continue
            seen.add(reading.id)
            readings.append(reading)
        return readings

    async def assess(self, start: Coordinate, end: Coordinate) -> RoadStatus:
        """도로 구간 상태를 평가합니다 (저장하지 않음)."""
        readings = await self.nearby_readings(start, end)
        return classify_road(start, end, readings)

    async def refresh(self, road: RoadSegment) -> RoadSegment:
        """도로 상태를 재평가하고 바뀌었으면 저장소에 반영합니다."""
        status = await self.assess(road.start, road.end)
        if status == road.status:
            return road

        updated = await self.roads.update_road_status(road.id, status)
        metrics.road_status_changes.labels(status=status.value).inc()
        log.info(f"도로 상태 갱신 road:{road.id} {road.status.value} -> {status.value}")
        return updated

    async def refresh_area(self, latitude: float, longitude: float,
                           radius_km: float) -> List[RoadSegment]:
        """영역 안 도로를 조회하고 최신 수위로 상태를 갱신해 반환합니다."""
        roads = await self.roads.get_roads_by_area(latitude, longitude, radius_km)
        return [await self.refresh(road) for road in roads]
