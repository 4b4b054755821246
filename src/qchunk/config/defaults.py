"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default scheduling settings
DEFAULT_BATCH_SIZE = 5
DEFAULT_RATE_PER_SECOND = 0  # unlimited
DEFAULT_TIMEOUT = 0.0  # seconds, 0 = no timeout

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "batch_size": DEFAULT_BATCH_SIZE,
        "rate_per_second": DEFAULT_RATE_PER_SECOND,
        "timeout": DEFAULT_TIMEOUT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
