"""pgzod CLI - pgzod command."""

from pathlib import Path

import click

from pgzod.cli.check import check_command
from pgzod.cli.generate import generate_command
from pgzod.config.loader import load_config
from pgzod.core.errors import ConfigError
from pgzod.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="pgzod")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./pgzod.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """pgzod - Compile Postgres catalog metadata into Zod schemas."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config = config.model_copy(
            update={"logging": config.logging.model_copy(update={"level": "DEBUG"})}
        )
    configure_logging(config=config.logging)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(generate_command, name="generate")
cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
