"""
Flood risk assessment for a single point.

Combines the nearest-river lookup with the risk rule table into
the "assess risk at this point" unit used by check-ins and alerts.
"""

import time
from typing import Optional
from floodguard.core.models import RiskAssessment, RiskLevel
from floodguard.core.risk import classify_risk, resolve_threshold, river_name_for
from floodguard.features.river_lookup import closest_river
from floodguard.observability import metrics
from floodguard.observability.logging_setup import get_logger
from floodguard.ports.stores import RiverLevelStorePort

log = get_logger("floodguard.assessor")

class FloodRiskAssessor:
    """지점별 홍수 위험 평가기"""

    def __init__(self,
                 rivers: RiverLevelStorePort,
                 *,
                 search_radius_km: float = 10.0,
                 distance_override_km: Optional[float] = 5.0):
        """
        초기화합니다.

        Args:
            rivers: 하천 수위 저장소
            search_radius_km: 가장 가까운 하천 검색 반경
            distance_override_km: 이보다 멀면 LOW로 고정 (None이면 비활성)
        """
        self.rivers = rivers
        self.search_radius_km = search_radius_km
        self.distance_override_km = distance_override_km

    async def assess(self, latitude: float, longitude: float) -> RiskAssessment:
        """
        지점의 홍수 위험을 평가합니다.

        반경 안에 하천이 없으면 LOW/0 상태를 반환합니다 (오류 아님).
        """
        started = time.perf_counter()
        found = await closest_river(self.rivers, latitude, longitude, self.search_radius_km)

        if found is None:
            assessment = RiskAssessment(
                risk_level=RiskLevel.LOW,
                water_level=0,
                threshold_level=0,
                distance=None,
                river_name=None,
            )
        else:
            reading, distance = found
            threshold = resolve_threshold(reading)
            level = classify_risk(
                reading.level,
                threshold,
                distance,
                distance_override_km=self.distance_override_km,
            )
            assessment = RiskAssessment(
                risk_level=level,
                water_level=reading.level,
                threshold_level=threshold,
                distance=distance,
                river_name=river_name_for(reading.latitude, reading.longitude),
            )

        metrics.assessments_total.labels(level=assessment.risk_level.value).inc()
        metrics.assess_seconds.observe(time.perf_counter() - started)
        log.debug(f"위험 평가 완료 lat:{latitude} lon:{longitude} "
                  f"level:{assessment.risk_level.value} distance:{assessment.distance}")
        return assessment
