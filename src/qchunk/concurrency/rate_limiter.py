"""Sliding-window rate limiter for task dispatch."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 1.0
SAFETY_MARGIN_SECONDS = 0.01


class RateLimiter:
    """At most N dispatches in any trailing one-second window.

    Holds the dispatch timestamps (monotonic clock). The limit is passed per
    call, so one instance can be shared by several runs: pass the same
    instance around to share a budget, create a new one for a private budget.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

        # Stats
        self._dispatches = 0
        self._total_wait_seconds = 0.0

    def delay(self, limit: int | None, now: float | None = None) -> float:
        """Seconds to wait before the next dispatch may proceed (0 = now)."""
        if not limit or len(self._timestamps) < limit:
            return 0.0

        now = self._clock() if now is None else now
        window_start = now - WINDOW_SECONDS
        recent = [t for t in self._timestamps if t > window_start]
        if len(recent) < limit:
            return 0.0

        # Once this one leaves the window there is room for one more.
        blocking = recent[-limit]
        return max(0.0, blocking + WINDOW_SECONDS - now + SAFETY_MARGIN_SECONDS)

    def record(self, timestamp: float, limit: int | None) -> None:
        """Record a dispatch and prune to the window.

        Keeps only timestamps inside the trailing window, and at most
        ``limit`` of them.
        """
        self._timestamps.append(timestamp)
        self._dispatches += 1

        window_start = timestamp - WINDOW_SECONDS
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()
        if limit:
            while len(self._timestamps) > limit:
                self._timestamps.popleft()

    async def acquire(self, limit: int | None) -> float:
        """Wait for room under ``limit``, then record the dispatch.

        Delay check, sleep and record happen under one lock, so concurrent
        callers cannot both see spare capacity. Returns seconds waited.
        """
        if not limit:
            return 0.0

        wait_total = 0.0
        async with self._lock:
            while (wait := self.delay(limit)) > 0:
                logger.debug("Rate limit %d/s reached, waiting %.3fs", limit, wait)
                wait_total += wait
                await asyncio.sleep(wait)
            self.record(self._clock(), limit)

        self._total_wait_seconds += wait_total
        return wait_total

    @property
    def timestamps(self) -> list[float]:
        return list(self._timestamps)

    @property
    def stats(self) -> dict:
        """Return current rate limiter statistics."""
        return {
            "dispatches": self._dispatches,
            "tracked": len(self._timestamps),
            "total_wait_seconds": self._total_wait_seconds,
        }

    def reset(self) -> None:
        """Reset all state (for testing)."""
        self._timestamps.clear()
        self._dispatches = 0
        self._total_wait_seconds = 0.0
