"""qchunk: queue and chunk async tasks with rate limiting, timeouts and cancellation."""

from qchunk.cancellation import CancellationToken
from qchunk.concurrency import (
    RateLimiter,
    TaskPool,
    chunk,
    make_pool,
    q,
    run_batched,
    run_sequential,
)
from qchunk.errors import AbortError, QChunkError, TaskTimeoutError
from qchunk.types import ProgressSnapshot, RunOptions, SettledStatus, TaskResult

__version__ = "0.1.0"

__all__ = [
    "AbortError",
    "CancellationToken",
    "ProgressSnapshot",
    "QChunkError",
    "RateLimiter",
    "RunOptions",
    "SettledStatus",
    "TaskPool",
    "TaskResult",
    "TaskTimeoutError",
    "chunk",
    "make_pool",
    "q",
    "run_batched",
    "run_sequential",
]
