"""
Route composition for FloodGuard.

Pure functions that turn the road segments found around a trip into
a ranked list of route segments: safe roads first, then caution,
then flooded, stitched to the raw start/end points with synthetic
connector segments when a known road endpoint is close enough.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from floodguard.common.geo import distance_km, midpoint
from .models import Coordinate, RoadSegment, RoadStatus, RouteSegment

# 경로 주변 도로 조회 반경 배율
AREA_BUFFER_FACTOR = 1.5

# 연결 구간 최대 거리 (킬로미터)
CONNECTOR_MAX_KM = 10.0

DIRECT_ROUTE_ID = "direct"
DIRECT_ROUTE_NAME = "Direct Route"


def query_area(start: Coordinate, end: Coordinate,
               buffer_factor: float = AREA_BUFFER_FACTOR) -> Tuple[float, float, float]:
    """
    경로 주변 도로 조회 영역을 계산합니다.

    Returns:
        (중심 위도, 중심 경도, 반경 km)
    """
    center_lat, center_lon = midpoint(start.latitude, start.longitude, end.latitude, end.longitude)
    radius = distance_km(start.latitude, start.longitude, end.latitude, end.longitude) * buffer_factor
    return center_lat, center_lon, radius


def is_zero_length(start: Coordinate, end: Coordinate) -> bool:
    return distance_km(start.latitude, start.longitude, end.latitude, end.longitude) == 0.0


def direct_route(start: Coordinate, end: Coordinate) -> RouteSegment:
    """출발지와 도착지를 잇는 직선 경로 (도로 데이터가 없을 때)"""
    if is_zero_length(start, end):
        path = [start.as_pair()]
    else:
        path = [start.as_pair(), end.as_pair()]
    return RouteSegment(id=DIRECT_ROUTE_ID, name=DIRECT_ROUTE_NAME,
                        status=RoadStatus.SAFE, path=path)


def road_to_route(road: RoadSegment) -> RouteSegment:
    return RouteSegment(
        id=str(road.id),
        name=road.name,
        status=road.status,
        path=[road.start.as_pair(), road.end.as_pair()],
    )


def partition_by_status(roads: Sequence[RoadSegment]) -> Dict[RoadStatus, List[RoadSegment]]:
    """도로를 상태별로 나눕니다 (입력 순서 유지)."""
    buckets: Dict[RoadStatus, List[RoadSegment]] = {status: [] for status in RoadStatus}
    for road in roads:
        buckets[road.status].append(road)
    return buckets


def _nearest(point: Coordinate, roads: Sequence[RoadSegment],
             use_end: bool) -> Optional[Tuple[RoadSegment, float]]:
    # 같은 거리면 먼저 본 도로가 선택됩니다
    best: Optional[Tuple[RoadSegment, float]] = None
    for road in roads:
        anchor = road.end if use_end else road.start
        d = distance_km(point.latitude, point.longitude, anchor.latitude, anchor.longitude)
        if best is None or d < best[1]:
            best = (road, d)
    return best


def connector_segments(start: Coordinate,
                       end: Coordinate,
                       roads: Sequence[RoadSegment],
                       max_km: float = CONNECTOR_MAX_KM) -> Tuple[Optional[RouteSegment], Optional[RouteSegment]]:
    """
    임의 좌표를 가장 가까운 도로 끝점에 잇는 연결 구간을 만듭니다.

    SAFE 도로가 있으면 SAFE 도로 중에서, 없으면 전체 도로 중에서 찾습니다.
    시작 연결과 끝 연결은 서로 다른 도로일 수 있습니다.
    거리가 0이거나 max_km 이상이면 연결 구간을 만들지 않습니다.

    Returns:
        (시작 연결 구간, 끝 연결 구간)
    """
    safe = [r for r in roads if r.status == RoadStatus.SAFE]
    candidates = safe or list(roads)

    head = tail = None

    nearest_start = _nearest(start, candidates, use_end=False)
    if nearest_start is not None and 0.0 < nearest_start[1] < max_km:
        road = nearest_start[0]
        head = RouteSegment(
            id=f"connector-start-{road.id}",
            name=f"Connector to {road.name}",
            status=RoadStatus.SAFE,
            path=[start.as_pair(), road.start.as_pair()],
        )

    nearest_end = _nearest(end, candidates, use_end=True)
    if nearest_end is not None and 0.0 < nearest_end[1] < max_km:
        road = nearest_end[0]
        tail = RouteSegment(
            id=f"connector-end-{road.id}",
            name=f"Connector from {road.name}",
            status=RoadStatus.SAFE,
            path=[road.end.as_pair(), end.as_pair()],
        )

    return head, tail


def compose_routes(start: Coordinate,
                   end: Coordinate,
                   roads: Sequence[RoadSegment],
                   *,
                   connector_max_km: float = CONNECTOR_MAX_KM) -> List[RouteSegment]:
    """
    주변 도로로 우선순위가 매겨진 경로 목록을 구성합니다.

    순서: 시작 연결 구간, SAFE 도로, 끝 연결 구간, NEAR_FLOOD 도로, UNDER_FLOOD 도로.
    연결 구간은 SAFE이므로 SAFE 묶음 안에 놓입니다.
    도로가 없거나 출발지와 도착지가 같으면 직선 경로 하나를 반환합니다.

    Args:
        start: 출발 좌표
        end: 도착 좌표
        roads: 조회 영역 안의 도로 구간들
        connector_max_km: 연결 구간 최대 거리

    Returns:
        안전한 순서로 정렬된 경로 구간 목록 (0번이 최선)
    """
    if is_zero_length(start, end) or not roads:
        return [direct_route(start, end)]

    buckets = partition_by_status(roads)
    head, tail = connector_segments(start, end, roads, connector_max_km)

    routes: List[RouteSegment] = []
    if head is not None:
        routes.append(head)
    routes.extend(road_to_route(r) for r in buckets[RoadStatus.SAFE])
    if tail is not None:
        routes.append(tail)
    routes.extend(road_to_route(r) for r in buckets[RoadStatus.NEAR_FLOOD])
    routes.extend(road_to_route(r) for r in buckets[RoadStatus.UNDER_FLOOD])

    return routes


def safe_only_view(routes: Sequence[RouteSegment]) -> List[RouteSegment]:
    """
    순위 목록 위의 표시용 필터입니다.

    SAFE 구간이 있으면 SAFE만, 없으면 NEAR_FLOOD 다음 UNDER_FLOOD를 반환합니다.
    """
    safe = [r for r in routes if r.status == RoadStatus.SAFE]
    if safe:
        return safe
    caution = [r for r in routes if r.status == RoadStatus.NEAR_FLOOD]
    danger = [r for r in routes if r.status == RoadStatus.UNDER_FLOOD]
    return caution + danger
