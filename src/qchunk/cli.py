"""Click CLI for qchunk: inspect resolved configuration."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from qchunk.config.hierarchy import load_config_hierarchy

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="qchunk")
def cli() -> None:
    """qchunk: queue and chunk async tasks."""


@cli.command()
@click.option("--batch-size", type=click.IntRange(min=1), default=None, help="Tasks per batch.")
@click.option("--rate", type=click.IntRange(min=0), default=None, help="Max dispatches/second.")
@click.option("--timeout", type=click.FloatRange(min=0), default=None, help="Per-task timeout (s).")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def config(
    batch_size: int | None,
    rate: int | None,
    timeout: float | None,
    verbose: int,
) -> None:
    """Show the resolved configuration."""
    resolved = load_config_hierarchy(
        batch_size=batch_size,
        rate_per_second=rate,
        timeout=timeout,
    )
    _setup_logging(verbose, resolved.get("log_level", "WARNING"))

    table = Table(title="Resolved Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key in sorted(resolved):
        table.add_row(key, str(resolved[key]))

    console.print(table)


if __name__ == "__main__":
    cli()
