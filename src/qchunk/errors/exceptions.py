"""Custom exception hierarchy for qchunk."""

from __future__ import annotations

from typing import Any


class QChunkError(Exception):
    """Base exception for all qchunk errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class AbortError(QChunkError):
    """The whole run was cancelled at a checkpoint.

    Only raised at run level. Results produced before the abort are available
    from the last progress snapshot.
    """

    def __init__(
        self,
        message: str = "Operation aborted",
        reason: Any = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason


class TaskTimeoutError(QChunkError, TimeoutError):
    """A single task did not settle within its timeout.

    The task itself is not stopped; it keeps running detached.
    """

    def __init__(
        self,
        message: str = "Operation timed out",
        timeout: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout = timeout
