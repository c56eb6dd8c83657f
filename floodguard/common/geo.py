"""
Geographic utilities for FloodGuard.

This module provides the single great-circle distance primitive
used by every other component, plus the cheap degree-box filter
used by store adapters for area queries.
"""

import math
from typing import Tuple

# 지구 반지름 (킬로미터)
EARTH_RADIUS_KM = 6371.0

# 위도 1도당 대략적인 거리 (킬로미터)
KM_PER_DEGREE = 111.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다 (킬로미터).

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (킬로미터)
    """
    # 도를 라디안으로 변환
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    # 대척점 근처 반올림 오차로 1을 넘지 않도록
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def midpoint(lat1: float, lon1: float, lat2: float, lon2: float) -> Tuple[float, float]:
    """두 좌표의 산술 중점을 반환합니다 (짧은 구간용 근사)."""
    return ((lat1 + lat2) / 2, (lon1 + lon2) / 2)


def km_to_degrees(radius_km: float) -> float:
    """킬로미터를 위도 기준 도(degree)로 환산합니다."""
    return radius_km / KM_PER_DEGREE


def within_degree_box(lat: float, lon: float,
                      center_lat: float, center_lon: float,
                      radius_km: float) -> bool:
    """
    점이 중심 기준 근사 사각형 안에 있는지 확인합니다.

    정확한 원이 아니라 위도/경도 모두 111km/도로 환산한 박스입니다.
    최종 거리 판정은 distance_km로 합니다.
    """
    span = km_to_degrees(radius_km)
    return abs(lat - center_lat) < span and abs(lon - center_lon) < span
