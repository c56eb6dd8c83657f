"""
재시도 유틸리티 단위 테스트
"""

import pytest
from unittest.mock import AsyncMock
from floodguard.common.retry import backoff_delay, retry_with_backoff


class TestBackoff:
    """백오프 지연 계산 테스트"""

    def test_exponential_without_jitter(self):
        assert backoff_delay(1, 0.5, 10.0, jitter=False) == 0.5
        assert backoff_delay(2, 0.5, 10.0, jitter=False) == 1.0
        assert backoff_delay(3, 0.5, 10.0, jitter=False) == 2.0

    def test_capped_at_max(self):
        assert backoff_delay(10, 1.0, 5.0, jitter=False) == 5.0

    def test_jitter_stays_within_half_to_full(self):
        for _ in range(20):
            d = backoff_delay(3, 1.0, 60.0, jitter=True)
            assert 2.0 <= d <= 4.0


class TestRetryWithBackoff:
    """재시도 동작 테스트"""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")
        assert await retry_with_backoff(func, max_retries=3, base_delay=0.0) == "ok"
        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        func = AsyncMock(side_effect=[ConnectionError("x"), ConnectionError("y"), "ok"])
        result = await retry_with_backoff(func, max_retries=3, base_delay=0.0, jitter=False)
        assert result == "ok"
        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_raises_last_error_after_max_retries(self):
        func = AsyncMock(side_effect=ConnectionError("down"))
        with pytest.raises(ConnectionError):
            await retry_with_backoff(func, max_retries=2, base_delay=0.0, jitter=False)
        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_unlisted_errors(self):
        func = AsyncMock(side_effect=ValueError("bad"))
        with pytest.raises(ValueError):
            await retry_with_backoff(func, max_retries=5, base_delay=0.0,
                                     retry_on=(ConnectionError,))
        assert func.await_count == 1
