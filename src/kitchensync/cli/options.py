"""
Reusable Typer Options Module

Option definitions shared by the main callback, used as ``Annotated``
metadata::

    log_level: Annotated[Optional[LogLevel], log_level_option] = None
"""

from __future__ import annotations

import typer

from kitchensync import __version__

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: configured level.",
)


# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"KitchenSync v{__version__}")
        raise typer.Exit


# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    callback=version_callback,
    is_eager=True,
)
