"""
Core domain models for FloodGuard.

This module defines the core domain models using Pydantic v2
for type safety and validation. Wire names follow the camelCase
contract consumed by existing clients (riskLevel, waterLevel, ...).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """위치별 홍수 위험 수준"""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RoadStatus(str, Enum):
    """도로 구간 통행 상태"""
    SAFE = "SAFE"
    NEAR_FLOOD = "NEAR_FLOOD"
    UNDER_FLOOD = "UNDER_FLOOD"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Coordinate(_WireModel):
    """위도/경도 좌표 모델"""
    latitude: float
    longitude: float

    def as_pair(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class RiverReading(_WireModel):
    """하천 수위 측정값 모델"""
    id: int
    latitude: float
    longitude: float
    level: float
    critical_threshold: Optional[float] = Field(default=None, alias="criticalThreshold")
    timestamp: Optional[datetime] = None


class RoadSegment(_WireModel):
    """도로 구간 모델"""
    id: int
    name: str
    start_lat: float = Field(alias="startLat")
    start_long: float = Field(alias="startLong")
    end_lat: float = Field(alias="endLat")
    end_long: float = Field(alias="endLong")
    status: RoadStatus = RoadStatus.SAFE
    distance: Optional[float] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")

    @property
    def start(self) -> Coordinate:
        return Coordinate(latitude=self.start_lat, longitude=self.start_long)

    @property
    def end(self) -> Coordinate:
        return Coordinate(latitude=self.end_lat, longitude=self.end_long)


class RiskAssessment(_WireModel):
    """위치별 홍수 위험 평가 결과"""
    risk_level: RiskLevel = Field(alias="riskLevel")
    water_level: float = Field(alias="waterLevel")
    threshold_level: Optional[float] = Field(default=None, alias="thresholdLevel")
    distance: Optional[float] = None
    river_name: Optional[str] = Field(default=None, alias="riverName")


class RouteSegment(_WireModel):
    """경로 구간 모델 (path는 [위도, 경도] 쌍의 순서열)"""
    id: str
    name: str
    status: RoadStatus
    path: List[Tuple[float, float]] = Field(default_factory=list)


class RouteSummary(_WireModel):
    """우선순위 경로 목록과 집계"""
    routes: List[RouteSegment] = Field(default_factory=list)
    safe_count: int = Field(default=0, alias="safeCount")
    total_roads: int = Field(default=0, alias="totalRoads")


class Recipient(_WireModel):
    """경보 수신자 (사용자 관리는 외부 책임)"""
    id: int
    email: str
    receive_alerts: bool = Field(default=True, alias="receiveAlerts")


class FloodRiskRecord(_WireModel):
    """저장된 위험 평가 이력"""
    id: int
    user_id: int = Field(alias="userId")
    latitude: float
    longitude: float
    risk_level: RiskLevel = Field(alias="riskLevel")
    water_level: Optional[float] = Field(default=None, alias="waterLevel")
    threshold_level: Optional[float] = Field(default=None, alias="thresholdLevel")
    timestamp: Optional[datetime] = None


class Alert(_WireModel):
    """사용자 경보 레코드"""
    id: int
    user_id: int = Field(alias="userId")
    risk_level: RiskLevel = Field(alias="riskLevel")
    message: str
    is_read: bool = Field(default=False, alias="isRead")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
