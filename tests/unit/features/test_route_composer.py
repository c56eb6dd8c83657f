"""
저장소 기반 경로 구성기 테스트
"""

import pytest
from unittest.mock import AsyncMock
from prometheus_client import REGISTRY
from floodguard.core.models import RoadStatus
from floodguard.features.route_composer import RouteComposer
from factories import HYDERABAD, coord

SEED_END = (17.405044, 78.506671)


class TestRouteComposer:
    """RouteComposer 테스트"""

    @pytest.mark.asyncio
    async def test_zero_length_skips_store(self):
        roads = AsyncMock()
        summary = await RouteComposer(roads).compose(coord(*HYDERABAD), coord(*HYDERABAD))

        roads.get_roads_by_area.assert_not_awaited()
        assert len(summary.routes) == 1
        assert summary.routes[0].status == RoadStatus.SAFE
        assert summary.routes[0].path == [HYDERABAD]

    @pytest.mark.asyncio
    async def test_zero_length_is_timed(self):
        """한 점짜리 경로도 소요 시간 히스토그램에 기록됨"""
        before = REGISTRY.get_sample_value("route_duration_seconds_count") or 0.0
        await RouteComposer(AsyncMock()).compose(coord(*HYDERABAD), coord(*HYDERABAD))
        assert REGISTRY.get_sample_value("route_duration_seconds_count") == before + 1

    @pytest.mark.asyncio
    async def test_empty_area_returns_direct_route(self, empty_store):
        summary = await RouteComposer(empty_store).compose(coord(*HYDERABAD), coord(*SEED_END))
        assert [r.path for r in summary.routes] == [[HYDERABAD, SEED_END]]
        assert summary.total_roads == 0

    @pytest.mark.asyncio
    async def test_seeded_roads_ranked_with_connector(self, seeded_store):
        summary = await RouteComposer(seeded_store).compose(coord(*HYDERABAD), coord(*SEED_END))

        # SAFE 도로 "B to C"로 연결, 끝점은 도착지와 같아 끝 연결 없음
        assert [r.id for r in summary.routes] == ["connector-start-2", "2", "1", "3"]
        assert [r.status for r in summary.routes] == [
            RoadStatus.SAFE, RoadStatus.SAFE, RoadStatus.UNDER_FLOOD, RoadStatus.UNDER_FLOOD,
        ]
        assert summary.total_roads == 3
        assert summary.safe_count == 1

    @pytest.mark.asyncio
    async def test_queries_midpoint_with_buffer(self):
        roads = AsyncMock()
        roads.get_roads_by_area.return_value = []
        await RouteComposer(roads, buffer_factor=2.0).compose(coord(17.0, 78.0), coord(17.2, 78.2))

        lat, lon, radius = roads.get_roads_by_area.await_args.args
        assert lat == pytest.approx(17.1)
        assert lon == pytest.approx(78.1)
        assert radius > 2 * 29.0

    @pytest.mark.asyncio
    async def test_wire_names(self, seeded_store):
        summary = await RouteComposer(seeded_store).compose(coord(*HYDERABAD), coord(*SEED_END))
        data = summary.model_dump(by_alias=True, mode="json")
        assert set(data) == {"routes", "safeCount", "totalRoads"}
        assert set(data["routes"][0]) == {"id", "name", "status", "path"}
