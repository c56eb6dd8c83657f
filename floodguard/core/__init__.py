"""
Core domain models and pure functions for FloodGuard.

This module contains the domain models and the pure risk and routing
logic that are independent of storage, HTTP and dispatch concerns.
"""

from .models import (
    Alert, Coordinate, FloodRiskRecord, Recipient, RiskAssessment, RiskLevel,
    RiverReading, RoadSegment, RoadStatus, RouteSegment, RouteSummary,
)
from .risk import classify_risk, resolve_threshold, river_name_for
from .road_status import classify_road
from .routing import compose_routes, safe_only_view

__all__ = [
    "Alert", "Coordinate", "FloodRiskRecord", "Recipient", "RiskAssessment",
    "RiskLevel", "RiverReading", "RoadSegment", "RoadStatus", "RouteSegment",
    "RouteSummary", "classify_risk", "resolve_threshold", "river_name_for",
    "classify_road", "compose_routes", "safe_only_view",
]
