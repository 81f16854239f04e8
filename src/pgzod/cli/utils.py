"""CLI utilities."""

from collections.abc import Sequence
from pathlib import Path

import click

from pgzod.compiler import CollectingSink, LoggingSink, TeeSink, compile_schema
from pgzod.config.models import PgZodConfig
from pgzod.core.errors import PgZodError
from pgzod.metadata import MetadataSnapshot, load_snapshot


def get_config(ctx: click.Context) -> PgZodConfig:
    """Config resolved by the ``pgzod`` group callback."""
    return ctx.find_root().obj["config"]  # type: ignore[no-any-return]


def load_from_config(
    path: Path,
    config: PgZodConfig,
    schemas: Sequence[str] = (),
) -> MetadataSnapshot:
    """Load a snapshot applying the generate settings.

    ``schemas`` given on the command line replace the configured allow-list.

    Raises:
        click.ClickException: If the dump cannot be read or validated
    """
    try:
        return load_snapshot(
            path,
            included_schemas=list(schemas) or config.generate.included_schemas,
            excluded_return_types=config.generate.excluded_return_types,
            detect_one_to_one_relationships=config.generate.detect_one_to_one_relationships,
        )
    except PgZodError as e:
        raise click.ClickException(str(e)) from e


def compile_collecting(
    snapshot: MetadataSnapshot,
    *,
    include_returns: bool = False,
) -> tuple[str, CollectingSink]:
    """Compile, logging diagnostics and keeping them for the caller.

    Raises:
        click.ClickException: On a malformed snapshot
    """
    collected = CollectingSink()
    try:
        document = compile_schema(
            snapshot,
            sink=TeeSink(LoggingSink(), collected),
            include_returns=include_returns,
        )
    except PgZodError as e:
        raise click.ClickException(str(e)) from e
    return document, collected
