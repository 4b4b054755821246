"""Shared Pydantic models for qchunk."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from qchunk.cancellation import CancellationToken

# A task is called with no arguments; a non-awaitable return counts as resolved.
Task = Callable[[], Any]

# ── Enums ──


class SettledStatus(StrEnum):
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


# ── Runtime models ──


class TaskResult(BaseModel):
    """Settled outcome of one task: a value or a reason, never both."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: SettledStatus
    value: Any = None
    reason: BaseException | None = None

    @classmethod
    def fulfilled(cls, value: Any) -> TaskResult:
        return cls(status=SettledStatus.FULFILLED, value=value)

    @classmethod
    def rejected(cls, reason: BaseException) -> TaskResult:
        return cls(status=SettledStatus.REJECTED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == SettledStatus.FULFILLED

    def unwrap(self) -> Any:
        """Return the value, or raise the rejection reason."""
        if not self.ok:
            raise self.reason
        return self.value


class ProgressSnapshot(BaseModel):
    """Point-in-time copy of a run's progress."""

    model_config = ConfigDict(frozen=True)

    done: int
    total: int
    results: tuple[TaskResult, ...] = ()
    batch_boundary: bool = False

    @model_validator(mode="after")
    def check_counts(self) -> ProgressSnapshot:
        if not 0 <= self.done <= self.total:
            raise ValueError(f"done={self.done} outside [0, {self.total}]")
        if len(self.results) != self.done:
            raise ValueError(f"{len(self.results)} results for done={self.done}")
        return self


# ── Config models ──

ProgressCallback = Callable[[ProgressSnapshot], Any]


class RunOptions(BaseModel):
    """Options shared by sequential and batched runs.

    timeout: seconds per task, 0/None disables.
    rate_per_second: dispatches per trailing second, 0 disables.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    on_progress: ProgressCallback | None = None
    cancel_token: CancellationToken | None = None
    timeout: float | None = Field(default=None, ge=0)
    rate_per_second: int = Field(default=0, ge=0)

    def merged(self, **overrides: Any) -> RunOptions:
        """Return a copy where each non-None override replaces the inherited value."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown run option: {key!r}")
            if value is not None:
                values[key] = value
        return RunOptions(**values)
