"""
Flood risk classification for FloodGuard.

This module contains the fixed rule table that maps a river reading
and the distance to it onto a risk level, and the cosmetic river-name
lookup used when reporting an assessment.
"""

from typing import Optional, Tuple
from floodguard.common.geo import distance_km
from .models import RiskLevel, RiverReading

# 임계 수위 아래 주의 구간 (미터)
WARNING_MARGIN_M = 5.0

# 하천 근접 주의 거리 (킬로미터)
NEAR_RIVER_KM = 0.5

# 알려진 하천 기준점 (위도, 경도, 이름)
RIVER_REFERENCES: Tuple[Tuple[float, float, str], ...] = (
    (17.385044, 78.486671, "Musi River"),             # Hyderabad
    (18.520407, 73.856255, "Mula River"),             # Pune
    (19.076090, 72.877426, "Mithi River"),            # Mumbai
    (12.971599, 77.594566, "Vrishabhavathi River"),   # Bangalore
)

UNKNOWN_RIVER = "Unknown River"


def resolve_threshold(reading: RiverReading) -> float:
    """
    측정값의 임계 수위를 반환합니다.

    임계 수위가 없으면 현재 수위 - 5m를 사용합니다.
    위험 평가와 도로 상태 평가가 같은 기본값을 공유합니다.
    """
    if reading.critical_threshold is None:
        return reading.level - WARNING_MARGIN_M
    return reading.critical_threshold


def classify_risk(
    water_level: float,
    critical_threshold: float,
    distance_to_river_km: float,
    *,
    distance_override_km: Optional[float] = None
) -> RiskLevel:
    """
    수위, 임계 수위, 하천까지 거리로 위험 수준을 분류합니다.

    위에서부터 처음 일치하는 규칙이 적용됩니다.

    Args:
        water_level: 현재 수위 (미터)
        critical_threshold: 임계 수위 (미터)
        distance_to_river_km: 하천까지 거리 (킬로미터)
        distance_override_km: 이 거리보다 멀면 수위와 무관하게 LOW (None이면 비활성)

    Returns:
        위험 수준
    """
    if distance_override_km is not None and distance_to_river_km > distance_override_km:
        return RiskLevel.LOW

    if water_level >= critical_threshold:
        return RiskLevel.HIGH
    if water_level >= critical_threshold - WARNING_MARGIN_M:
        return RiskLevel.MEDIUM
    if distance_to_river_km < NEAR_RIVER_KM:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def river_name_for(latitude: float, longitude: float) -> str:
    """가장 가까운 알려진 하천 이름을 반환합니다 (표시용)."""
    best_name = UNKNOWN_RIVER
    best_distance = float("inf")

    for ref_lat, ref_lon, name in RIVER_REFERENCES:
        d = distance_km(latitude, longitude, ref_lat, ref_lon)
        if d < best_distance:
            best_distance = d
            best_name = name

    return best_name


# 표시 계층용 색상 이름. 분류기는 UNKNOWN을 만들지 않습니다.
_RISK_COLORS = {
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "amber",
    RiskLevel.LOW: "green",
}


def risk_color(level) -> str:
    """위험 수준 표시 색상 (알 수 없는 값은 gray)"""
    try:
        return _RISK_COLORS[RiskLevel(level)]
    except ValueError:
        return "gray"
