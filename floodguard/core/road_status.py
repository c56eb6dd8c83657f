"""
Road status classification for FloodGuard.

Pure function mapping a road segment's endpoints and nearby river
readings onto a road status.
"""

from typing import Iterable
from floodguard.common.geo import distance_km
from .models import Coordinate, RiverReading, RoadStatus
from .risk import WARNING_MARGIN_M, resolve_threshold

# 침수 판정 거리 (킬로미터)
UNDER_FLOOD_KM = 0.2

# 침수 근접 판정 거리 (킬로미터)
NEAR_FLOOD_KM = 0.5


def classify_road(start: Coordinate,
                  end: Coordinate,
                  readings: Iterable[RiverReading]) -> RoadStatus:
    """
    도로 양 끝점과 주변 수위 측정값으로 도로 상태를 분류합니다.

    UNDER_FLOOD 조건을 만족하는 측정값이 하나라도 있으면 측정값 순서와
    무관하게 UNDER_FLOOD입니다. 그 다음 NEAR_FLOOD, 둘 다 없으면 SAFE.

    Args:
        start: 도로 시작점
        end: 도로 끝점
        readings: 끝점 주변으로 미리 걸러진 측정값들

    Returns:
        도로 상태
    """
    near_flood = False

    for reading in readings:
        to_start = distance_km(start.latitude, start.longitude, reading.latitude, reading.longitude)
        to_end = distance_km(end.latitude, end.longitude, reading.latitude, reading.longitude)
        closest = min(to_start, to_end)
        threshold = resolve_threshold(reading)

        if closest < UNDER_FLOOD_KM and reading.level > threshold:
            return RoadStatus.UNDER_FLOOD

        if closest < NEAR_FLOOD_KM and reading.level > threshold - WARNING_MARGIN_M:
            near_flood = True

    return RoadStatus.NEAR_FLOOD if near_flood else RoadStatus.SAFE


_ROAD_COLORS = {
    RoadStatus.SAFE: "green",
    RoadStatus.NEAR_FLOOD: "amber",
    RoadStatus.UNDER_FLOOD: "red",
}


def road_status_color(status) -> str:
    """도로 상태 표시 색상 (알 수 없는 값은 gray)"""
    try:
        return _ROAD_COLORS[RoadStatus(status)]
    except ValueError:
        return "gray"
