"""
KitchenSync Typer CLI Application

Rate-limited, cached access to the food data provider from the command
line. Global options (``--json``, ``--log-level``) go before the command::

    kitchensync --json groceries search milk
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from kitchensync.cli.commands import cache, groceries, ingredients, mapping, recipes
from kitchensync.cli.context import CliContext, LogLevel, set_cli_context
from kitchensync.cli.error_handler import handle_cli_error
from kitchensync.cli.options import json_output_option, log_level_option, version_option
from kitchensync.config import get_config
from kitchensync.shared.logging import setup_structured_logger

app = typer.Typer(
    name="kitchensync",
    help="Rate-limited, cache-backed food and recipe lookups.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def main_callback(log_level: LogLevel | None, json_output: bool) -> None:
    """
    Process the common options.

    Loads the configuration, sets up logging and stores the CLI context for
    the command that follows.
    """
    settings = get_config()
    level = log_level.value if log_level is not None else settings.logging.level
    setup_structured_logger(
        level=level,
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )
    set_cli_context(CliContext(log_level=log_level, json_output=json_output))


@app.callback()
def main(
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,  # handled eagerly by its callback
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(log_level, json_output)
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


app.add_typer(ingredients.app, name="ingredients")
app.add_typer(groceries.app, name="groceries")
app.add_typer(recipes.app, name="recipes")
app.add_typer(cache.app, name="cache")
app.command("map")(mapping.map_command)
