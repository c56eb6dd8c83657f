"""
Sample river gauges and roads used to seed a fresh store.
"""

from floodguard.core.models import RoadStatus

# (위도, 경도, 수위, 임계 수위)
RIVER_LEVELS = [
    (17.385044, 78.486671, 85.0, 80.0),   # Hyderabad
    (18.520407, 73.856255, 95.0, 90.0),   # Pune
    (19.076090, 72.877426, 80.0, 75.0),   # Mumbai
    (12.971599, 77.594566, 75.0, 70.0),   # Bangalore
]

# (이름, 시작 위도, 시작 경도, 끝 위도, 끝 경도, 상태, 거리 km)
ROADS = [
    ("A to B", 17.385044, 78.486671, 17.395044, 78.496671, RoadStatus.UNDER_FLOOD, 1.2),
    ("B to C", 17.395044, 78.496671, 17.405044, 78.506671, RoadStatus.SAFE, 0.8),
    ("A to C", 17.385044, 78.486671, 17.405044, 78.506671, RoadStatus.UNDER_FLOOD, 1.5),
]
