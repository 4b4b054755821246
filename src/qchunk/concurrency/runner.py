"""Run one task, optionally against a timeout, and settle its outcome.

A timed-out task is detached, not cancelled: ``asyncio.wait`` returns when the
timer fires, the caller gets ``TaskTimeoutError``, and the task keeps running
until it finishes on its own. Stopping it would need the task itself to
accept a cancellation signal, which the task contract does not include.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any

from qchunk.errors.exceptions import TaskTimeoutError
from qchunk.types import Task, TaskResult

logger = logging.getLogger(__name__)

# Strong references to timed-out tasks still running in the background.
_detached: set[asyncio.Future[Any]] = set()


async def _invoke(task: Task) -> Any:
    outcome = task()
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


def _on_detached_done(future: asyncio.Future[Any]) -> None:
    _detached.discard(future)
    if future.cancelled():
        logger.debug("Detached task was cancelled")
        return
    exc = future.exception()
    if exc is not None:
        logger.debug("Detached task failed after timeout: %r", exc)
    else:
        logger.debug("Detached task finished after timeout")


def _detach(future: asyncio.Future[Any]) -> None:
    _detached.add(future)
    future.add_done_callback(_on_detached_done)


def detached_count() -> int:
    """Number of timed-out tasks that are still running."""
    return len(_detached)


async def run_with_timeout(task: Task, timeout: float | None = None) -> Any:
    """Await ``task()``; with a timeout, raise TaskTimeoutError if it loses the race."""
    if not timeout:
        return await _invoke(task)

    future = asyncio.ensure_future(_invoke(task))
    try:
        done, _ = await asyncio.wait({future}, timeout=timeout)
    except asyncio.CancelledError:
        _detach(future)
        raise

    if future not in done:
        _detach(future)
        logger.warning("Task timed out after %.3fs, leaving it running", timeout)
        raise TaskTimeoutError(f"Operation timed out after {timeout:g}s", timeout=timeout)

    return future.result()


async def run_settled(task: Task, timeout: float | None = None) -> TaskResult:
    """Run a task and capture its outcome. Never raises for task failures."""
    try:
        value = await run_with_timeout(task, timeout)
    except Exception as exc:
        logger.debug("Task rejected: %r", exc)
        return TaskResult.rejected(exc)
    return TaskResult.fulfilled(value)
