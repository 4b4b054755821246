"""Tests for the sliding-window rate limiter."""

import asyncio

import pytest

from qchunk.concurrency.rate_limiter import RateLimiter


class TestDelay:
    def test_unlimited(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        limiter.record(fake_clock(), 1)
        assert limiter.delay(0) == 0.0
        assert limiter.delay(None) == 0.0

    def test_below_limit(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        limiter.record(100.0, 3)
        limiter.record(100.1, 3)
        assert limiter.delay(3) == 0.0

    def test_at_limit_waits_for_oldest(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        for ts in (100.0, 100.1, 100.2):
            limiter.record(ts, 3)
        fake_clock.now = 100.5
        # oldest + window - now + margin
        assert limiter.delay(3) == pytest.approx(0.51)

    def test_explicit_now(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        for ts in (100.0, 100.1):
            limiter.record(ts, 2)
        assert limiter.delay(2, now=100.9) == pytest.approx(0.11)

    def test_window_expired(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        for ts in (100.0, 100.1, 100.2):
            limiter.record(ts, 3)
        fake_clock.now = 101.3
        assert limiter.delay(3) == 0.0

    def test_uses_limit_th_most_recent(self, fake_clock):
        """A smaller limit than the one recorded with is still exact."""
        limiter = RateLimiter(clock=fake_clock)
        for ts in (100.0, 100.1, 100.2, 100.3):
            limiter.record(ts, 10)
        fake_clock.now = 100.5
        assert limiter.delay(2) == pytest.approx(100.2 + 1.0 - 100.5 + 0.01)


class TestRecord:
    def test_prunes_outside_window(self):
        limiter = RateLimiter()
        for ts in (100.0, 100.1, 100.2):
            limiter.record(ts, 3)
        limiter.record(101.5, 3)
        assert limiter.timestamps == [101.5]

    def test_keeps_at_most_limit(self):
        limiter = RateLimiter()
        for ts in (100.0, 100.1, 100.2, 100.3, 100.4):
            limiter.record(ts, 3)
        assert limiter.timestamps == [100.2, 100.3, 100.4]

    def test_same_policy_for_any_caller(self):
        """Pruning depends only on the limit, not on who records."""
        a, b = RateLimiter(), RateLimiter()
        for ts in (100.0, 100.1, 100.2, 100.3):
            a.record(ts, 2)
            b.record(ts, 2)
        assert a.timestamps == b.timestamps == [100.2, 100.3]


class TestAcquire:
    async def test_unlimited_does_not_record(self):
        limiter = RateLimiter()
        assert await limiter.acquire(0) == 0.0
        assert limiter.stats["dispatches"] == 0

    async def test_within_capacity(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock)
        assert await limiter.acquire(2) == 0.0
        fake_clock.advance(0.1)
        assert await limiter.acquire(2) == 0.0
        assert limiter.stats["dispatches"] == 2
        assert limiter.timestamps == [100.0, 100.1]

    async def test_waits_when_full(self, fake_clock, monkeypatch):
        slept: list[float] = []

        async def fake_sleep(seconds):
            slept.append(seconds)
            fake_clock.advance(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)

        limiter = RateLimiter(clock=fake_clock)
        await limiter.acquire(2)
        fake_clock.advance(0.2)
        await limiter.acquire(2)
        fake_clock.advance(0.3)
        waited = await limiter.acquire(2)

        assert waited == pytest.approx(0.51)
        assert slept == [pytest.approx(0.51)]
        assert limiter.stats["total_wait_seconds"] == pytest.approx(0.51)

    async def test_real_clock_spacing(self):
        limiter = RateLimiter()
        loop = asyncio.get_running_loop()
        start = loop.time()
        for _ in range(3):
            await limiter.acquire(2)
        assert loop.time() - start >= 0.95

    async def test_concurrent_callers_share_budget(self, fake_clock, monkeypatch):
        async def fake_sleep(seconds):
            fake_clock.advance(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)

        limiter = RateLimiter(clock=fake_clock)
        await asyncio.gather(*(limiter.acquire(3) for _ in range(6)))

        assert limiter.stats["dispatches"] == 6
        # Only the fourth caller had to wait for the first window to pass
        assert limiter.stats["total_wait_seconds"] == pytest.approx(1.01)
        assert min(limiter.timestamps) >= 101.0


class TestStatsAndReset:
    def test_stats_initial(self):
        stats = RateLimiter().stats
        assert stats == {"dispatches": 0, "tracked": 0, "total_wait_seconds": 0.0}

    async def test_reset(self):
        limiter = RateLimiter()
        await limiter.acquire(5)
        limiter.reset()
        assert limiter.timestamps == []
        assert limiter.stats["dispatches"] == 0
