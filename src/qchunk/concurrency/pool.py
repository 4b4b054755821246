"""Task pool: one shared rate limiter behind sequential and batched runs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from qchunk.cancellation import CancellationToken
from qchunk.concurrency.batcher import DEFAULT_BATCH_SIZE, batch_tasks
from qchunk.concurrency.rate_limiter import RateLimiter
from qchunk.concurrency.sequencer import sequence_tasks
from qchunk.types import ProgressCallback, RunOptions, Task, TaskResult

logger = logging.getLogger(__name__)


class TaskPool:
    """Shared-limiter dispatcher for independent call sites.

    Every run started through the pool, sequential or batched, concurrent or
    not, draws from the same RateLimiter. Per-call options override the
    pool defaults; the limiter itself cannot be swapped per call.
    """

    def __init__(
        self,
        *,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
        timeout: float | None = None,
        rate_per_second: int = 0,
        batch_size: int = DEFAULT_BATCH_SIZE,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"Batch size must be >= 1, got {batch_size}")
        self._defaults = RunOptions(
            on_progress=on_progress,
            cancel_token=cancel_token,
            timeout=timeout,
            rate_per_second=rate_per_second,
        )
        self._batch_size = batch_size
        self._rate_limiter = rate_limiter or RateLimiter()

    @classmethod
    def from_config(cls, **overrides: Any) -> TaskPool:
        """Build a pool from the configuration hierarchy.

        ``overrides`` are runtime arguments (highest priority); callbacks and
        tokens are passed through untouched.
        """
        from qchunk.config.hierarchy import load_config_hierarchy

        on_progress = overrides.pop("on_progress", None)
        cancel_token = overrides.pop("cancel_token", None)
        config = load_config_hierarchy(**overrides)
        logger.debug(
            "Pool from config: batch_size=%s rate_per_second=%s timeout=%s",
            config["batch_size"],
            config["rate_per_second"],
            config["timeout"],
        )
        return cls(
            on_progress=on_progress,
            cancel_token=cancel_token,
            timeout=config["timeout"],
            rate_per_second=config["rate_per_second"],
            batch_size=config["batch_size"],
        )

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def defaults(self) -> RunOptions:
        return self._defaults

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def run_sequential(
        self,
        tasks: Iterable[Task],
        *,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
        timeout: float | None = None,
        rate_per_second: int | None = None,
    ) -> list[TaskResult]:
        """Sequential run bound to the pool's limiter."""
        options = self._defaults.merged(
            on_progress=on_progress,
            cancel_token=cancel_token,
            timeout=timeout,
            rate_per_second=rate_per_second,
        )
        return await sequence_tasks(tasks, options, self._rate_limiter)

    async def run_batched(
        self,
        tasks: Iterable[Task],
        size: int | None = None,
        *,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
        timeout: float | None = None,
        rate_per_second: int | None = None,
    ) -> list[TaskResult]:
        """Batched run bound to the pool's limiter."""
        options = self._defaults.merged(
            on_progress=on_progress,
            cancel_token=cancel_token,
            timeout=timeout,
            rate_per_second=rate_per_second,
        )
        return await batch_tasks(
            tasks, size if size is not None else self._batch_size, options, self._rate_limiter
        )

    q = run_sequential
    chunk = run_batched


def make_pool(**defaults: Any) -> TaskPool:
    """Create a TaskPool; keyword arguments become its default options."""
    return TaskPool(**defaults)
