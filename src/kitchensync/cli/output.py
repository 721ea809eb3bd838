"""Shared command plumbing: broker lifecycle, error exit and result rendering."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from kitchensync.cli.context import get_cli_context
from kitchensync.cli.error_handler import handle_cli_error
from kitchensync.cli.json_formatter import format_json_output
from kitchensync.lookups import init_broker, shutdown_broker
from kitchensync.services.broker import FoodDataBroker
from kitchensync.services.lookups.models import LookupResponse

console = Console()

ResponseT = TypeVar("ResponseT", bound=LookupResponse[Any])

Column = tuple[str, Callable[[Any], Any]]


def emit_json(command: str, data: Any) -> None:
    typer.echo(format_json_output(success=True, command=command, data=data).decode("utf-8"))


def fail(error: BaseException, command: str) -> typer.Exit:
    """Report error and build the matching typer.Exit to raise."""
    exit_code = handle_cli_error(
        error,
        command,
        json_output=get_cli_context().is_json_output_enabled(),
    )
    return typer.Exit(exit_code)


def run_lookup(
    command: str,
    action: Callable[[FoodDataBroker], ResponseT],
    render: Callable[[ResponseT], None],
) -> None:
    """Run one lookup against a fresh process broker and print the result."""
    try:
        broker = init_broker()
        response = action(broker)
    except Exception as e:  # noqa: BLE001
        raise fail(e, command) from e
    finally:
        shutdown_broker()

    if get_cli_context().is_json_output_enabled():
        emit_json(command, response.to_payload())
    else:
        render(response)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value) or "-"
    return str(value)


def render_table(
    title: str,
    columns: Sequence[Column],
    rows: Sequence[Any],
    response: LookupResponse[Any] | None = None,
) -> None:
    """Print rows as a rich table, with the result count and cache state."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for index, (header, _) in enumerate(columns):
        table.add_column(header, style="cyan" if index == 0 else None)
    for row in rows:
        table.add_row(*(_cell(getter(row)) for _, getter in columns))
    console.print(table)

    if response is not None:
        source = "cache" if response.cached else "provider"
        console.print(
            f"[dim]{len(rows)} of {response.total_results} result(s), served from {source}[/dim]",
        )


def render_details(title: str, fields: Sequence[tuple[str, Any]]) -> None:
    """Print a single record as a two-column key/value table."""
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for name, value in fields:
        table.add_row(name, _cell(value))
    console.print(table)
