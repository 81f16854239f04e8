"""Per-column refinements.

A column's Zod expression is its mapped base type followed by refinements
in a fixed order: type-level ones (format checks, enum values, description)
then presence-level ones (nullable, optional). Which columns appear at all
is decided separately by ``include_column``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pgzod.compiler.render import js_string, z_enum
from pgzod.metadata.models import Column

NULLABLE = "nullable()"
OPTIONAL = "optional()"

UUID_PATTERN = r"/^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$/"
INET_PATTERN = r"/^(?:(?:\d{1,3}\.){3}\d{1,3}|[0-9a-fA-F]*:[0-9a-fA-F:.]*)(?:\/\d{1,3})?$/"
TIMETZ_PATTERN = r"/^\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}(?::?\d{2})?)$/"

_TEMPORAL_MODIFIERS = {
    "date": "date()",
    "time": "time()",
    "timestamp": "datetime({ local: true })",
    # Offset-aware formats
    "timestamptz": "datetime({ offset: true })",
    "timetz": f"regex({TIMETZ_PATTERN})",
}


class Context(StrEnum):
    """Which field-object variant a column is composed for."""

    ROW = "row"
    INSERT = "insert"
    UPDATE = "update"
    VIEW = "view"


def has_enum(column: Column) -> bool:
    return column.data_type == "USER-DEFINED" and len(column.enums) > 0


def include_column(column: Column, context: Context) -> bool:
    """Whether the column is a field of the given variant at all.

    Insert and update never carry ``GENERATED ALWAYS`` identity columns; the
    view variant only carries columns the view lets a client write.
    """
    if context in (Context.INSERT, Context.UPDATE):
        return column.identity_generation != "ALWAYS"
    if context is Context.VIEW:
        return column.is_updatable
    return True


def type_modifiers(column: Column) -> list[str]:
    modifiers: list[str] = []

    if column.format == "uuid":
        modifiers.append(f"regex({UUID_PATTERN})")

    if column.format in _TEMPORAL_MODIFIERS:
        modifiers.append(_TEMPORAL_MODIFIERS[column.format])

    if has_enum(column):
        modifiers.append(f"pipe({z_enum(column.enums)})")

    if column.format == "inet":
        modifiers.append(f"regex({INET_PATTERN})")

    if column.comment:
        modifiers.append(f"describe({js_string(column.comment)})")

    return modifiers


def presence_modifiers(column: Column, context: Context) -> list[str]:
    modifiers: list[str] = []
    if column.is_nullable:
        modifiers.append(NULLABLE)

    if context is Context.ROW:
        return modifiers

    # The database supplies a value, so the client may omit the field
    if column.is_nullable or column.is_identity or column.default_value is not None:
        modifiers.append(OPTIONAL)

    if context is Context.UPDATE:
        modifiers.append(OPTIONAL)
    return modifiers


def dedupe(modifiers: Iterable[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence of each."""
    return list(dict.fromkeys(modifiers))


def compose_modifiers(column: Column, context: Context) -> list[str]:
    """Ordered, duplicate-free refinements for ``column`` in ``context``.

    Does not filter: callers check ``include_column`` first.
    """
    return dedupe([*type_modifiers(column), *presence_modifiers(column, context)])
