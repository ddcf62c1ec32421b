"""
Unified CLI entry point for nexus-sync using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import sync
from .._version import __version__
from ..utils.constants import DEFAULT_MAX_WORKERS, EXIT_USER_INTERRUPT


def normalize_token(token: str) -> str:
    """Accept ``--from_url`` as an alias of ``--from-url``."""
    return token.replace("_", "-")


# ============================================================================
# CLI Group
# ============================================================================


@click.group(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "token_normalize_func": normalize_token,
    }
)
@click.version_option(version=__version__, prog_name="nexus-sync")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a TOML config file with [from] and [to] endpoint tables",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.option(
    "--max-workers",
    type=click.IntRange(min=1, max=255),
    default=DEFAULT_MAX_WORKERS,
    help=f"Maximum number of concurrent workers (default: {DEFAULT_MAX_WORKERS})",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    debug: int,
    max_workers: int,
) -> None:
    """nexus-sync - Mirror artifacts between Nexus repositories."""
    # Store shared options in context for subcommands to access
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["max_workers"] = max_workers


# Register subcommands
cli.add_command(sync.sync)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation aborted by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["cli", "main", "normalize_token"]
