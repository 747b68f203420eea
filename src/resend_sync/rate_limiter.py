"""Fixed-interval rate limiter for paginated Resend requests.

Resend allows roughly 2 requests/second, so consecutive page requests in one
pagination run are spaced by a fixed delay. The limiter is purely preventive:
no adaptive backoff, no jitter, no retry on 429.
"""

import asyncio
import logging

from .metrics import rate_limit_waits_total

logger = logging.getLogger("resend_sync.rate_limiter")

DEFAULT_INTERVAL_MS = 1000


class RateLimiter:
    """Spaces consecutive requests of a single pagination run.

    The first ``wait()`` returns immediately; every later call sleeps for
    ``interval_ms``. Create one instance per run: instances share nothing.

    Attributes:
        interval_ms: Delay applied before every request except the first
        requests_started: Number of wait() calls so far

    Example:
        >>> limiter = RateLimiter(interval_ms=1000)
        >>> await limiter.wait()  # first request, no delay
        >>> await limiter.wait()  # sleeps 1s
    """

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS) -> None:
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be >= 0, got {interval_ms}")
        self.interval_ms = interval_ms
        self.requests_started = 0

    @property
    def is_first_request(self) -> bool:
        """True until the first wait() call."""
        return self.requests_started == 0

    async def wait(self) -> None:
        """Suspend before the next request if one was already issued."""
        first = self.is_first_request
        self.requests_started += 1
        if first or self.interval_ms == 0:
            return

        logger.debug(
            "resend_rate_limit_wait",
            extra={
                "interval_ms": self.interval_ms,
                "request_number": self.requests_started,
            },
        )
        rate_limit_waits_total.inc()
        await asyncio.sleep(self.interval_ms / 1000.0)
