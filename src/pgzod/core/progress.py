"""User-facing status output for CLI operations.

Status lines and summaries go to stderr through a shared Rich console so
that ``pgzod generate`` can stream the document itself on stdout.

Usage::

    from pgzod.core.progress import status

    status("Loaded snapshot")
    status("Wrote schema.ts", style="success")  # ✓ Wrote schema.ts
    status("Drift detected", style="error")  # ✗ Drift detected
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Console for output
_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from pgzod.core.logging import get_logger

    return get_logger("progress")


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False, soft_wrap=True)

    # Log at DEBUG for observability (lazy to respect runtime config)
    _get_logger().debug("status", message=message, style=style)


def make_summary_table(rows: dict[str, dict[str, int]]) -> Table:
    """Create a Rich Table with per-schema entity counts.

    Args:
        rows: Schema name -> {"tables": n, "views": n, "enums": n, "functions": n}

    Returns:
        Rich Table ready to print on the shared console
    """
    table = Table(box=None, padding=(0, 1), pad_edge=False)
    table.add_column("schema", style="cyan")
    for column in ("tables", "views", "enums", "functions"):
        table.add_column(column, justify="right")

    for schema_name, counts in rows.items():
        table.add_row(
            schema_name,
            *(str(counts.get(column, 0)) for column in ("tables", "views", "enums", "functions")),
        )
    return table
