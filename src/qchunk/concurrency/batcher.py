"""Batched execution: fixed-size groups, each group run concurrently."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from qchunk.cancellation import CancellationToken, checkpoint
from qchunk.concurrency.rate_limiter import RateLimiter
from qchunk.concurrency.runner import run_settled
from qchunk.types import ProgressCallback, ProgressSnapshot, RunOptions, Task, TaskResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


class _GroupState:
    """Bookkeeping for the group currently in flight."""

    def __init__(self, completed: list[TaskResult], size: int, total: int) -> None:
        self.completed = completed
        self.slots: list[TaskResult | None] = [None] * size
        self.total = total
        self.skipped = 0

    def settled_so_far(self) -> tuple[TaskResult, ...]:
        return (*self.completed, *(r for r in self.slots if r is not None))


async def _run_member(
    state: _GroupState,
    position: int,
    task: Task,
    options: RunOptions,
    limiter: RateLimiter,
) -> None:
    await limiter.acquire(options.rate_per_second)

    token = options.cancel_token
    if token is not None and token.cancelled:
        state.skipped += 1
        return

    state.slots[position] = await run_settled(task, options.timeout)

    if options.on_progress:
        settled = state.settled_so_far()
        options.on_progress(
            ProgressSnapshot(done=len(settled), total=state.total, results=settled)
        )


async def batch_tasks(
    tasks: Iterable[Task],
    size: int,
    options: RunOptions,
    limiter: RateLimiter,
) -> list[TaskResult]:
    """Run tasks in consecutive groups of ``size`` against the given limiter.

    Cancellation is checked before each group. A started group is never
    interrupted: members already dispatched settle, members still waiting on
    the rate limiter are skipped, then the run raises AbortError.
    """
    if size < 1:
        raise ValueError(f"Batch size must be >= 1, got {size}")

    tasks = list(tasks)
    total = len(tasks)
    results: list[TaskResult] = []
    logger.info("Batched run started: %d tasks in groups of %d", total, size)

    index = 0
    while index < total:
        checkpoint(options.cancel_token)

        group = tasks[index : index + size]
        state = _GroupState(results, len(group), total)
        logger.debug("Dispatching group at %d (%d tasks)", index, len(group))
        await asyncio.gather(
            *(
                _run_member(state, position, task, options, limiter)
                for position, task in enumerate(group)
            )
        )

        if state.skipped:
            logger.warning(
                "Run aborted mid-group: %d of %d tasks not dispatched",
                state.skipped,
                len(group),
            )
            checkpoint(options.cancel_token)

        results.extend(r for r in state.slots if r is not None)
        index += len(group)

        if options.on_progress:
            options.on_progress(
                ProgressSnapshot(
                    done=len(results),
                    total=total,
                    results=tuple(results),
                    batch_boundary=True,
                )
            )

    logger.info(
        "Batched run finished: %d tasks, %d rejected",
        total,
        sum(not r.ok for r in results),
    )
    return results


async def run_batched(
    tasks: Iterable[Task],
    size: int = DEFAULT_BATCH_SIZE,
    *,
    on_progress: ProgressCallback | None = None,
    cancel_token: CancellationToken | None = None,
    timeout: float | None = None,
    rate_per_second: int = 0,
) -> list[TaskResult]:
    """Run tasks ``size`` at a time with a private rate limiter.

    Returns one settled result per task, in input order. Raises AbortError
    if ``cancel_token`` is set at a checkpoint.
    """
    options = RunOptions(
        on_progress=on_progress,
        cancel_token=cancel_token,
        timeout=timeout,
        rate_per_second=rate_per_second,
    )
    return await batch_tasks(tasks, size, options, RateLimiter())


chunk = run_batched
