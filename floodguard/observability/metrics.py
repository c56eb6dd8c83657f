"""
Metrics definitions for FloodGuard.

This module defines Prometheus metrics for monitoring
risk assessments, road status refreshes and route composition.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
assessments_total = Counter(
    "flood_assessments_total",
    "Number of flood risk assessments",
    ["level"]
)

road_status_changes = Counter(
    "road_status_changes_total",
    "Road status write-backs after re-classification",
    ["status"]
)

routes_composed = Counter(
    "routes_composed_total",
    "Route lists composed",
    ["kind"]
)

alerts_created = Counter(
    "flood_alerts_created_total",
    "Alert records created for elevated risk",
    ["level"]
)

alerts_dispatched = Counter(
    "flood_alerts_dispatched_total",
    "Alert dispatch attempts by outcome",
    ["outcome"]
)

# 히스토그램 메트릭
assess_seconds = Histogram(
    "assess_duration_seconds",
    "Time spent assessing flood risk",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)

route_seconds = Histogram(
    "route_duration_seconds",
    "Time spent composing routes",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)
