import asyncio
import time

import pytest


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_task():
    """Factory for async tasks that record when they were dispatched."""
    dispatched: list[float] = []

    def factory(value=None, delay: float = 0.0, error: Exception | None = None):
        async def task():
            dispatched.append(time.monotonic())
            if delay:
                await asyncio.sleep(delay)
            if error is not None:
                raise error
            return value

        return task

    factory.dispatched = dispatched
    return factory
