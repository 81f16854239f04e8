"""pgzod error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Snapshot
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Snapshot (3xxx)
    SNAPSHOT_PARSE_ERROR = 3001
    SNAPSHOT_INVALID = 3002
    SNAPSHOT_TOPOLOGY_ERROR = 3003


@dataclass(frozen=True, slots=True)
class PgZodError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SNAPSHOT_TOPOLOGY_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(PgZodError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SnapshotError(PgZodError):
    """Malformed or stale metadata snapshot.

    Raised for input the compiler has no safe fallback for. Unknown
    storage types are not snapshot errors; they degrade with a diagnostic.
    """

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_PARSE_ERROR,
            message=f"Failed to parse snapshot at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid(cls, location: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_INVALID,
            message=f"Invalid snapshot entry at {location}: {reason}",
            details={"location": location, "reason": reason},
        )

    @classmethod
    def unknown_table(cls, table_id: int, column: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_TOPOLOGY_ERROR,
            message=f"Column '{column}' references unknown table id {table_id}",
            details={"table_id": table_id, "column": column},
        )
