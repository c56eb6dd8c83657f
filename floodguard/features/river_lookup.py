"""
Nearest river reading lookup for FloodGuard.
"""

from typing import Optional, Tuple
from floodguard.common.geo import distance_km
from floodguard.core.models import RiverReading
from floodguard.ports.stores import RiverLevelStorePort

async def closest_river(store: RiverLevelStorePort,
                        latitude: float,
                        longitude: float,
                        search_radius_km: float) -> Optional[Tuple[RiverReading, float]]:
    """
    반경 안에서 가장 가까운 수위 측정값을 찾습니다.

    저장소는 근사 박스로 후보를 거르고, 최종 선택은 Haversine 거리로 합니다.
    거리가 같으면 저장소가 먼저 반환한 측정값이 선택됩니다.

    Args:
        store: 하천 수위 저장소
        latitude: 위도
        longitude: 경도
        search_radius_km: 검색 반경 (킬로미터)

    Returns:
        (측정값, 거리 km) 또는 후보가 없으면 None
    """
    candidates = await store.get_river_levels_by_area(latitude, longitude, search_radius_km)

    best: Optional[Tuple[RiverReading, float]] = None
    for reading in candidates:
        d = distance_km(latitude, longitude, reading.latitude, reading.longitude)
        if best is None or d < best[1]:
            best = (reading, d)

    return best
