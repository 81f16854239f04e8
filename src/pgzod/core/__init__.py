"""Core module exports."""

from pgzod.core.errors import (
    ConfigError,
    ErrorCode,
    PgZodError,
    SnapshotError,
)
from pgzod.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from pgzod.core.progress import status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "PgZodError",
    "SnapshotError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "status",
]
