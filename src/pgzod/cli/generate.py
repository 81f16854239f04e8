"""pgzod generate command - compile a catalog dump into a Zod module."""

import time
from pathlib import Path

import click

from pgzod.cli.utils import compile_collecting, get_config, load_from_config
from pgzod.compiler import summarize
from pgzod.core.formatting import format_duration, join_counts, pluralize
from pgzod.core.logging import set_run_id
from pgzod.core.progress import get_console, make_summary_table, status


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the module here instead of stdout",
)
@click.option(
    "-s",
    "--schema",
    "schemas",
    multiple=True,
    help="Schema to include (repeatable, sets output order)",
)
@click.option("--strict", is_flag=True, help="Fail if any type could not be mapped")
@click.option(
    "--returns/--no-returns",
    "include_returns",
    default=None,
    help="Emit function return schemas (default: generate.include_returns)",
)
@click.option("--summary", is_flag=True, help="Print per-schema counts")
@click.pass_context
def generate_command(
    ctx: click.Context,
    snapshot: Path,
    output: Path | None,
    schemas: tuple[str, ...],
    strict: bool,
    include_returns: bool | None,
    summary: bool,
) -> None:
    """Compile SNAPSHOT (a JSON or YAML catalog dump) into a Zod module.

    The module goes to stdout unless --output or generate.output is set.
    """
    config = get_config(ctx)
    set_run_id()
    started = time.perf_counter()

    metadata = load_from_config(snapshot, config, schemas)
    if include_returns is None:
        include_returns = config.generate.include_returns
    document, diagnostics = compile_collecting(metadata, include_returns=include_returns)

    # Enum names fall back to their values and are not reported here
    unmapped = diagnostics.unmapped
    if unmapped:
        status(pluralize(len(unmapped), "unknown type reference"), style="warning")
        for diagnostic in unmapped:
            status(f"{diagnostic.message} ({diagnostic.site})", indent=2)
        if strict:
            raise click.ClickException("Unmapped types found (--strict)")

    target = output or (Path(config.generate.output) if config.generate.output else None)
    if target is None:
        click.echo(document, nl=False)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document, encoding="utf-8")
        status(f"Wrote {target}", style="success")

    counts = summarize(metadata)
    totals = [
        (sum(c[key] for c in counts.values()), word)
        for key, word in (
            ("tables", "table"),
            ("views", "view"),
            ("enums", "enum"),
            ("functions", "function"),
        )
    ]
    elapsed = format_duration(time.perf_counter() - started)
    status(f"Compiled {join_counts(totals)} in {elapsed}")
    if summary:
        get_console().print(make_summary_table(counts))
