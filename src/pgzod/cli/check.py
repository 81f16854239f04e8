"""pgzod check command - detect drift against a checked-in module."""

import difflib
from pathlib import Path

import click

from pgzod.cli.utils import compile_collecting, get_config, load_from_config
from pgzod.core.logging import set_run_id
from pgzod.core.progress import status


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("artifact", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-s",
    "--schema",
    "schemas",
    multiple=True,
    help="Schema to include (repeatable, sets output order)",
)
@click.option(
    "--returns/--no-returns",
    "include_returns",
    default=None,
    help="Compare with return schemas (default: generate.include_returns)",
)
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff on drift")
@click.pass_context
def check_command(
    ctx: click.Context,
    snapshot: Path,
    artifact: Path,
    schemas: tuple[str, ...],
    include_returns: bool | None,
    show_diff: bool,
) -> None:
    """Exit non-zero if ARTIFACT differs from what SNAPSHOT compiles to.

    Generation is deterministic, so any difference means the artifact is
    stale or was edited by hand.
    """
    config = get_config(ctx)
    set_run_id()

    if include_returns is None:
        include_returns = config.generate.include_returns
    document, _ = compile_collecting(
        load_from_config(snapshot, config, schemas), include_returns=include_returns
    )

    if not artifact.exists():
        status(f"{artifact} does not exist", style="error")
        ctx.exit(1)

    current = artifact.read_text(encoding="utf-8")
    if current == document:
        status(f"{artifact} is up to date", style="success")
        return

    status(f"{artifact} is out of date", style="error")
    if show_diff:
        diff = difflib.unified_diff(
            current.splitlines(keepends=True),
            document.splitlines(keepends=True),
            fromfile=str(artifact),
            tofile="generated",
        )
        click.echo("".join(diff), nl=False)
    ctx.exit(1)
