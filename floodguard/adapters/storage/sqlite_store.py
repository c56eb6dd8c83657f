"""
SQLite-based store for FloodGuard.

This module implements every storage port on SQLite through aiosqlite.
Area queries use the same approximate degree box as the in-memory
store so both backends return the same candidates.
"""

import aiosqlite
from datetime import datetime, timezone
from typing import Any, List, Optional
from floodguard.common.geo import km_to_degrees
from floodguard.core.models import (
    Alert, FloodRiskRecord, RiskLevel, RiverReading, RoadSegment, RoadStatus,
)
from floodguard.errors import NotFoundError, StoreError
from floodguard.observability.logging_setup import get_logger
from . import seed

log = get_logger("floodguard.store.sqlite")

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS river_levels (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    level REAL NOT NULL,
    critical_threshold REAL,
    timestamp TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS roads (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    start_lat REAL NOT NULL,
    start_long REAL NOT NULL,
    end_lat REAL NOT NULL,
    end_long REAL NOT NULL,
    status TEXT NOT NULL,
    distance REAL,
    last_updated TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS flood_risks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    risk_level TEXT NOT NULL,
    water_level REAL,
    threshold_level REAL,
    timestamp TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_flood_risks_user ON flood_risks(user_id);
CREATE TABLE IF NOT EXISTS alerts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    risk_level TEXT NOT NULL,
    message TEXT NOT NULL,
    is_read INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_alerts_user ON alerts(user_id);
"""

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

def _river(row: Any) -> RiverReading:
    return RiverReading(
        id=row["id"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        level=row["level"],
        critical_threshold=row["critical_threshold"],
        timestamp=row["timestamp"],
    )

def _road(row: Any) -> RoadSegment:
    return RoadSegment(
        id=row["id"],
        name=row["name"],
        start_lat=row["start_lat"],
        start_long=row["start_long"],
        end_lat=row["end_lat"],
        end_long=row["end_long"],
        status=RoadStatus(row["status"]),
        distance=row["distance"],
        last_updated=row["last_updated"],
    )

def _risk(row: Any) -> FloodRiskRecord:
    return FloodRiskRecord(
        id=row["id"],
        user_id=row["user_id"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        risk_level=RiskLevel(row["risk_level"]),
        water_level=row["water_level"],
        threshold_level=row["threshold_level"],
        timestamp=row["timestamp"],
    )

def _alert(row: Any) -> Alert:
    return Alert(
        id=row["id"],
        user_id=row["user_id"],
        risk_level=RiskLevel(row["risk_level"]),
        message=row["message"],
        is_read=bool(row["is_read"]),
        created_at=row["created_at"],
    )

class SQLiteFloodStore:
    """SQLite 기반 저장소"""
    
    def __init__(self, path: str):
        """
        초기화합니다.
        
        Args:
            path: SQLite 데이터베이스 파일 경로
        """
        self.path = path
        log.info(f"SQLiteFloodStore 초기화: {path}")
    
    async def _fetch_all(self, sql: str, params: tuple = ()) -> List[Any]:
        try:
            async with aiosqlite.connect(self.path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(sql, params)
                return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            log.error(f"SQLiteFloodStore 조회 오류: {e}")
            raise StoreError(str(e)) from e
    
    async def _fetch_one(self, sql: str, params: tuple = ()) -> Optional[Any]:
        rows = await self._fetch_all(sql, params)
        return rows[0] if rows else None
    
    async def _execute(self, sql: str, params: tuple = ()) -> int:
        """쓰기 쿼리를 실행하고 lastrowid 또는 rowcount를 반환합니다."""
        try:
            async with aiosqlite.connect(self.path) as db:
                cursor = await db.execute(sql, params)
                await db.commit()
                if sql.lstrip().upper().startswith("INSERT"):
                    return cursor.lastrowid
                return cursor.rowcount
        except aiosqlite.Error as e:
            log.error(f"SQLiteFloodStore 쓰기 오류: {e}")
            raise StoreError(str(e)) from e
    
    async def init(self, *, seed_data: bool = False) -> None:
        """데이터베이스를 초기화합니다. 비어 있으면 시드 데이터를 넣습니다."""
        try:
            async with aiosqlite.connect(self.path) as db:
                await db.executescript(SCHEMA)
                await db.commit()
        except aiosqlite.Error as e:
            raise StoreError(str(e)) from e
        log.info("SQLiteFloodStore 스키마 초기화 완료")
        
        if not seed_data:
            return
        
        row = await self._fetch_one("SELECT COUNT(*) AS n FROM river_levels")
        if row["n"] == 0:
            for lat, lon, level, threshold in seed.RIVER_LEVELS:
                await self.add_river_level(lat, lon, level, threshold)
        row = await self._fetch_one("SELECT COUNT(*) AS n FROM roads")
        if row["n"] == 0:
            for name, slat, slon, elat, elon, status, dist in seed.ROADS:
                await self.add_road(name, slat, slon, elat, elon, status, dist)
        log.info("SQLiteFloodStore 시드 데이터 확인 완료")
    
    # ---- 하천 수위 ----
    
    async def add_river_level(self, latitude: float, longitude: float, level: float,
                              critical_threshold: Optional[float] = None) -> RiverReading:
        rid = await self._execute(
            "INSERT INTO river_levels (latitude, longitude, level, critical_threshold, timestamp) "
            "VALUES (?, ?, ?, ?, ?)",
            (latitude, longitude, level, critical_threshold, _now())
        )
        row = await self._fetch_one("SELECT * FROM river_levels WHERE id = ?", (rid,))
        return _river(row)
    
    async def get_river_levels_by_area(self, latitude: float, longitude: float,
                                       radius_km: float) -> List[RiverReading]:
        span = km_to_degrees(radius_km)
        rows = await self._fetch_all(
            "SELECT * FROM river_levels "
            "WHERE ABS(latitude - ?) < ? AND ABS(longitude - ?) < ? ORDER BY id",
            (latitude, span, longitude, span)
        )
        return [_river(r) for r in rows]
    
    async def update_river_level(self, reading_id: int, level: float) -> RiverReading:
        changed = await self._execute(
            "UPDATE river_levels SET level = ?, timestamp = ? WHERE id = ?",
            (level, _now(), reading_id)
        )
        if changed == 0:
            raise NotFoundError("river_level", reading_id)
        row = await self._fetch_one("SELECT * FROM river_levels WHERE id = ?", (reading_id,))
        return _river(row)
    
    # ---- 도로 ----
    
    async def add_road(self, name: str, start_lat: float, start_long: float,
                       end_lat: float, end_long: float,
                       status: RoadStatus = RoadStatus.SAFE,
                       distance: Optional[float] = None) -> RoadSegment:
        rid = await self._execute(
            "INSERT INTO roads (name, start_lat, start_long, end_lat, end_long, status, distance, last_updated) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (name, start_lat, start_long, end_lat, end_long, RoadStatus(status).value, distance, _now())
        )
        row = await self._fetch_one("SELECT * FROM roads WHERE id = ?", (rid,))
        return _road(row)
    
    async def get_roads_by_area(self, latitude: float, longitude: float,
                                radius_km: float) -> List[RoadSegment]:
        span = km_to_degrees(radius_km)
        rows = await self._fetch_all(
            "SELECT * FROM roads WHERE "
            "(ABS(start_lat - ?) < ? AND ABS(start_long - ?) < ?) OR "
            "(ABS(end_lat - ?) < ? AND ABS(end_long - ?) < ?) ORDER BY id",
            (latitude, span, longitude, span, latitude, span, longitude, span)
        )
        return [_road(r) for r in rows]
    
    async def update_road_status(self, road_id: int, status: RoadStatus) -> RoadSegment:
        changed = await self._execute(
            "UPDATE roads SET status = ?, last_updated = ? WHERE id = ?",
            (RoadStatus(status).value, _now(), road_id)
        )
        if changed == 0:
            raise NotFoundError("road", road_id)
        row = await self._fetch_one("SELECT * FROM roads WHERE id = ?", (road_id,))
        return _road(row)
    
    # ---- 위험 평가 이력 ----
    
    async def add_flood_risk(self, user_id: int, latitude: float, longitude: float,
                             risk_level: RiskLevel, water_level: Optional[float],
                             threshold_level: Optional[float]) -> FloodRiskRecord:
        rid = await self._execute(
            "INSERT INTO flood_risks (user_id, latitude, longitude, risk_level, water_level, threshold_level, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (user_id, latitude, longitude, RiskLevel(risk_level).value, water_level, threshold_level, _now())
        )
        row = await self._fetch_one("SELECT * FROM flood_risks WHERE id = ?", (rid,))
        return _risk(row)
    
    async def get_flood_risks_by_user(self, user_id: int) -> List[FloodRiskRecord]:
        rows = await self._fetch_all(
            "SELECT * FROM flood_risks WHERE user_id = ? ORDER BY id DESC", (user_id,)
        )
        return [_risk(r) for r in rows]
    
    # ---- 경보 ----
    
    async def add_alert(self, user_id: int, risk_level: RiskLevel, message: str) -> Alert:
        aid = await self._execute(
            "INSERT INTO alerts (user_id, risk_level, message, is_read, created_at) VALUES (?, ?, ?, 0, ?)",
            (user_id, RiskLevel(risk_level).value, message, _now())
        )
        return await self.get_alert(aid)
    
    async def get_alerts_by_user(self, user_id: int) -> List[Alert]:
        rows = await self._fetch_all(
            "SELECT * FROM alerts WHERE user_id = ? ORDER BY id DESC", (user_id,)
        )
        return [_alert(r) for r in rows]
    
    async def get_alert(self, alert_id: int) -> Alert:
        row = await self._fetch_one("SELECT * FROM alerts WHERE id = ?", (alert_id,))
        if row is None:
            raise NotFoundError("alert", alert_id)
        return _alert(row)
    
    async def mark_alert_read(self, alert_id: int) -> Alert:
        changed = await self._execute("UPDATE alerts SET is_read = 1 WHERE id = ?", (alert_id,))
        if changed == 0:
            raise NotFoundError("alert", alert_id)
        return await self.get_alert(alert_id)
