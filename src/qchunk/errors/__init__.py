"""Error handling: exception hierarchy for qchunk."""

from qchunk.errors.exceptions import AbortError, QChunkError, TaskTimeoutError

__all__ = [
    "QChunkError",
    "AbortError",
    "TaskTimeoutError",
]
