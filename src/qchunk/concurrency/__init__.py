"""Concurrency: rate limiting, task running, sequential and batched scheduling."""

from qchunk.concurrency.batcher import batch_tasks, chunk, run_batched
from qchunk.concurrency.pool import TaskPool, make_pool
from qchunk.concurrency.rate_limiter import RateLimiter
from qchunk.concurrency.runner import run_settled, run_with_timeout
from qchunk.concurrency.sequencer import q, run_sequential, sequence_tasks

__all__ = [
    "RateLimiter",
    "TaskPool",
    "batch_tasks",
    "chunk",
    "make_pool",
    "q",
    "run_batched",
    "run_sequential",
    "run_settled",
    "run_with_timeout",
    "sequence_tasks",
]
