"""Cooperative, checkpoint-based cancellation."""

from __future__ import annotations

import logging
from typing import Any

from qchunk.errors.exceptions import AbortError

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-way cancellation flag with an optional reason.

    Runs poll the token at fixed checkpoints; setting it never interrupts a
    task that is already running.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Any = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Any:
        return self._reason

    def cancel(self, reason: Any = None) -> None:
        """Set the flag. Later calls keep the first reason."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        logger.debug("Cancellation requested: %s", reason)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            message = f"Operation aborted: {self._reason}" if self._reason else "Operation aborted"
            raise AbortError(message, reason=self._reason)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


def checkpoint(token: CancellationToken | None) -> None:
    """Raise AbortError if the (optional) token is set."""
    if token is not None:
        token.raise_if_cancelled()
