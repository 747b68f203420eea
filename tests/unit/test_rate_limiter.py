"""Unit tests for the fixed-interval rate limiter."""

from unittest.mock import AsyncMock, patch

import pytest
from prometheus_client import REGISTRY

from resend_sync.rate_limiter import RateLimiter


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_first_wait_does_not_sleep(self):
        """First request of a run goes out immediately."""
        limiter = RateLimiter(interval_ms=1000)

        with patch("asyncio.sleep", new=AsyncMock()) as mock_sleep:
            await limiter.wait()

        mock_sleep.assert_not_called()
        assert limiter.requests_started == 1

    @pytest.mark.asyncio
    async def test_later_waits_sleep_interval(self):
        """Every later request sleeps the full interval."""
        limiter = RateLimiter(interval_ms=1000)

        with patch("asyncio.sleep", new=AsyncMock()) as mock_sleep:
            for _ in range(4):
                await limiter.wait()

        assert mock_sleep.await_count == 3
        mock_sleep.assert_awaited_with(1.0)

    @pytest.mark.asyncio
    async def test_custom_interval(self):
        limiter = RateLimiter(interval_ms=250)

        with patch("asyncio.sleep", new=AsyncMock()) as mock_sleep:
            await limiter.wait()
            await limiter.wait()

        mock_sleep.assert_awaited_once_with(0.25)

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self):
        limiter = RateLimiter(interval_ms=0)

        with patch("asyncio.sleep", new=AsyncMock()) as mock_sleep:
            await limiter.wait()
            await limiter.wait()

        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_instances_are_independent(self):
        """A second limiter does not inherit the first one's state."""
        first = RateLimiter()
        await first.wait()

        second = RateLimiter()
        assert second.is_first_request is True
        assert first.is_first_request is False

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError, match="interval_ms"):
            RateLimiter(interval_ms=-1)

    @pytest.mark.asyncio
    async def test_waits_counted(self):
        before = REGISTRY.get_sample_value("resend_rate_limit_waits_total") or 0.0
        limiter = RateLimiter(interval_ms=1000)

        with patch("asyncio.sleep", new=AsyncMock()):
            for _ in range(3):
                await limiter.wait()

        assert REGISTRY.get_sample_value("resend_rate_limit_waits_total") == before + 2
