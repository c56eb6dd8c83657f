"""
Storage port interfaces.

This module defines the protocols for the persistence layer the
core consumes: area queries for river readings and roads, the road
status write-back, and the risk history / alert records.
"""

from typing import List, Optional, Protocol
from floodguard.core.models import (
    Alert, FloodRiskRecord, RiskLevel, RiverReading, RoadSegment, RoadStatus,
)

class RiverLevelStorePort(Protocol):
    """하천 수위 저장소 포트 인터페이스"""
    
    async def get_river_levels_by_area(self, latitude: float, longitude: float,
                                       radius_km: float) -> List[RiverReading]:
        """
        영역 안의 수위 측정값을 조회합니다 (근사 박스 필터).
        
        Args:
            latitude: 중심 위도
            longitude: 중심 경도
            radius_km: 반경 (킬로미터)
            
        Returns:
            측정값 목록 (id 순)
        """
        ...
    
    async def update_river_level(self, reading_id: int, level: float) -> RiverReading:
        """수위를 갱신합니다."""
        ...

class RoadStorePort(Protocol):
    """도로 저장소 포트 인터페이스"""
    
    async def get_roads_by_area(self, latitude: float, longitude: float,
                                radius_km: float) -> List[RoadSegment]:
        """
        시작점 또는 끝점이 영역 안에 있는 도로를 조회합니다.
        
        Args:
            latitude: 중심 위도
            longitude: 중심 경도
            radius_km: 반경 (킬로미터)
            
        Returns:
            도로 목록 (id 순)
        """
        ...
    
    async def update_road_status(self, road_id: int, status: RoadStatus) -> RoadSegment:
        """
        도로 상태를 갱신합니다.
        
        Raises:
            NotFoundError: 도로가 없을 때
        """
        ...

class RiskHistoryPort(Protocol):
    """위험 평가 이력 포트 인터페이스"""
    
    async def add_flood_risk(self, user_id: int, latitude: float, longitude: float,
                             risk_level: RiskLevel, water_level: Optional[float],
                             threshold_level: Optional[float]) -> FloodRiskRecord:
        ...
    
    async def get_flood_risks_by_user(self, user_id: int) -> List[FloodRiskRecord]:
        """최신순 이력을 반환합니다."""
        ...

class AlertStorePort(Protocol):
    """경보 레코드 포트 인터페이스"""
    
    async def add_alert(self, user_id: int, risk_level: RiskLevel, message: str) -> Alert:
        ...
    
    async def get_alerts_by_user(self, user_id: int) -> List[Alert]:
        """최신순 경보 목록을 반환합니다."""
        ...

    async def get_alert(self, alert_id: int) -> Alert:
        """
        경보를 조회합니다.

        Raises:
            NotFoundError: 경보가 없을 때
        """
        ...

    async def mark_alert_read(self, alert_id: int) -> Alert:
        """
        경보를 읽음 처리합니다.
        
        Raises:
            NotFoundError: 경보가 없을 때
        """
        ...

class FloodStorePort(RiverLevelStorePort, RoadStorePort, RiskHistoryPort, AlertStorePort, Protocol):
    """모든 저장소 포트를 구현하는 단일 백엔드"""
