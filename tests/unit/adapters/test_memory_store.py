"""
메모리 저장소 테스트
"""

import pytest
from floodguard.core.models import RiskLevel, RoadStatus
from floodguard.errors import NotFoundError
from factories import HYDERABAD, PUNE


class TestInMemoryFloodStore:
    """InMemoryFloodStore 테스트"""

    @pytest.mark.asyncio
    async def test_seed_data(self, seeded_store):
        near_pune = await seeded_store.get_river_levels_by_area(*PUNE, 5.0)
        assert [(r.level, r.critical_threshold) for r in near_pune] == [(95.0, 90.0)]

        roads = await seeded_store.get_roads_by_area(*HYDERABAD, 5.0)
        assert [r.id for r in roads] == [1, 2, 3]
        assert roads[0].status == RoadStatus.UNDER_FLOOD

    @pytest.mark.asyncio
    async def test_empty_store(self, empty_store):
        assert await empty_store.get_river_levels_by_area(*HYDERABAD, 1000.0) == []

    @pytest.mark.asyncio
    async def test_area_box_is_exclusive(self, empty_store):
        empty_store.add_river_level(17.0, 78.0, 1.0)
        # 정확히 경계(1도 = 111km)에 있는 점은 제외
        empty_store.add_river_level(18.0, 78.0, 2.0)

        readings = await empty_store.get_river_levels_by_area(17.0, 78.0, 111.0)
        assert [r.level for r in readings] == [1.0]

    @pytest.mark.asyncio
    async def test_updates_replace_records(self, seeded_store):
        before = (await seeded_store.get_roads_by_area(*HYDERABAD, 5.0))[1]
        after = await seeded_store.update_road_status(before.id, RoadStatus.NEAR_FLOOD)

        assert after.status == RoadStatus.NEAR_FLOOD
        assert before.status == RoadStatus.SAFE
        assert after.last_updated >= before.last_updated

        reading = await seeded_store.update_river_level(1, 70.0)
        assert reading.level == 70.0
        assert reading.critical_threshold == 80.0

    @pytest.mark.asyncio
    async def test_missing_ids(self, empty_store):
        with pytest.raises(NotFoundError):
            await empty_store.update_road_status(1, RoadStatus.SAFE)
        with pytest.raises(NotFoundError):
            await empty_store.update_river_level(1, 1.0)
        with pytest.raises(NotFoundError):
            await empty_store.get_alert(1)

    @pytest.mark.asyncio
    async def test_alerts_per_user(self, empty_store):
        await empty_store.add_alert(1, RiskLevel.HIGH, "a")
        await empty_store.add_alert(2, RiskLevel.MEDIUM, "b")
        latest = await empty_store.add_alert(1, RiskLevel.MEDIUM, "c")

        alerts = await empty_store.get_alerts_by_user(1)
        assert [a.message for a in alerts] == ["c", "a"]

        marked = await empty_store.mark_alert_read(latest.id)
        assert marked.is_read is True
        assert (await empty_store.get_alert(latest.id)).is_read is True
