"""
Store-backed route composition for FloodGuard.
"""

import time
from floodguard.core.models import Coordinate, RoadStatus, RouteSummary
from floodguard.core.routing import (
    AREA_BUFFER_FACTOR, CONNECTOR_MAX_KM, compose_routes, direct_route,
    is_zero_length, query_area,
)
from floodguard.observability import metrics
from floodguard.observability.logging_setup import get_logger
from floodguard.ports.stores import RoadStorePort

log = get_logger("floodguard.routing")

class RouteComposer:
    """출발지-도착지 경로 구성기"""

    def __init__(self,
                 roads: RoadStorePort,
                 *,
                 buffer_factor: float = AREA_BUFFER_FACTOR,
                 connector_max_km: float = CONNECTOR_MAX_KM):
        """
        초기화합니다.

        Args:
            roads: 도로 저장소
            buffer_factor: 직선 거리 대비 조회 반경 배율
            connector_max_km: 연결 구간 최대 거리
        """
        self.roads = roads
        self.buffer_factor = buffer_factor
        self.connector_max_km = connector_max_km

    async def compose(self, start: Coordinate, end: Coordinate) -> RouteSummary:
        """
        경로 목록을 구성합니다.

        출발지와 도착지가 같으면 저장소를 조회하지 않고 한 점짜리 경로를 반환합니다.
        """
        started = time.perf_counter()

        if is_zero_length(start, end):
            metrics.routes_composed.labels(kind="trivial").inc()
            metrics.route_seconds.observe(time.perf_counter() - started)
            return RouteSummary(routes=[direct_route(start, end)], safe_count=0, total_roads=0)

        center_lat, center_lon, radius = query_area(start, end, self.buffer_factor)
        roads = await self.roads.get_roads_by_area(center_lat, center_lon, radius)

        routes = compose_routes(start, end, roads, connector_max_km=self.connector_max_km)
        kind = "ranked" if roads else "direct"
        metrics.routes_composed.labels(kind=kind).inc()
        metrics.route_seconds.observe(time.perf_counter() - started)

        # 침수되지 않은 도로 수
        safe_count = sum(1 for r in roads if r.status != RoadStatus.UNDER_FLOOD)
        log.debug(f"경로 구성 완료 roads:{len(roads)} safe:{safe_count} routes:{len(routes)}")
        return RouteSummary(routes=routes, safe_count=safe_count, total_roads=len(roads))
