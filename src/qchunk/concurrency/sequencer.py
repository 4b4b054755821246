"""Sequential execution: one task in flight at a time."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from qchunk.cancellation import CancellationToken, checkpoint
from qchunk.concurrency.rate_limiter import RateLimiter
from qchunk.concurrency.runner import run_settled
from qchunk.types import ProgressCallback, ProgressSnapshot, RunOptions, Task, TaskResult

logger = logging.getLogger(__name__)


async def sequence_tasks(
    tasks: Iterable[Task],
    options: RunOptions,
    limiter: RateLimiter,
) -> list[TaskResult]:
    """Run tasks strictly in order against the given limiter.

    Cancellation is checked before and after each rate-limit wait; a set
    token aborts the run with AbortError, never a task already running.
    """
    tasks = list(tasks)
    total = len(tasks)
    results: list[TaskResult] = []
    logger.info("Sequential run started: %d tasks", total)

    for index, task in enumerate(tasks):
        checkpoint(options.cancel_token)
        await limiter.acquire(options.rate_per_second)
        checkpoint(options.cancel_token)

        logger.debug("Dispatching task %d/%d", index + 1, total)
        result = await run_settled(task, options.timeout)
        results.append(result)

        if options.on_progress:
            options.on_progress(
                ProgressSnapshot(done=len(results), total=total, results=tuple(results))
            )

    logger.info(
        "Sequential run finished: %d tasks, %d rejected",
        total,
        sum(not r.ok for r in results),
    )
    return results


async def run_sequential(
    tasks: Iterable[Task],
    *,
    on_progress: ProgressCallback | None = None,
    cancel_token: CancellationToken | None = None,
    timeout: float | None = None,
    rate_per_second: int = 0,
) -> list[TaskResult]:
    """Run tasks one at a time with a private rate limiter.

    Returns one settled result per task, in input order. Raises AbortError
    if ``cancel_token`` is set at a checkpoint.
    """
    options = RunOptions(
        on_progress=on_progress,
        cancel_token=cancel_token,
        timeout=timeout,
        rate_per_second=rate_per_second,
    )
    return await sequence_tasks(tasks, options, RateLimiter())


q = run_sequential
