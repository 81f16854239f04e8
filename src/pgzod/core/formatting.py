"""Summary formatting utilities for consistent terminal output.

Design principles:
- Every summary fits on one line (~80 chars max)
- Grammatically correct (1 table vs 2 tables)
"""

from __future__ import annotations


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "table")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 table" or "3 tables"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples:
        0.345 -> "0.3s"
        90.0 -> "1m 30s"
        3661.0 -> "1h 1m"
    """
    if seconds < 0:
        raise ValueError("Duration must be non-negative")

    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes = int(seconds // 60)
    remaining_secs = int(seconds % 60)

    if minutes < 60:
        return f"{minutes}m {remaining_secs}s"

    hours = minutes // 60
    remaining_mins = minutes % 60
    return f"{hours}h {remaining_mins}m"


def join_counts(parts: list[tuple[int, str]]) -> str:
    """Join non-zero counts into a comma separated summary.

    Examples:
        [(2, "table"), (0, "view"), (1, "enum")] -> "2 tables, 1 enum"
        [] -> "nothing"
    """
    shown = [pluralize(count, word) for count, word in parts if count]
    return ", ".join(shown) if shown else "nothing"
