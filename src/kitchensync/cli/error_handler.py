"""
CLI Error Handling Utilities

Consistent error output for every command: a rich message on stderr, or a
JSON error envelope on stdout with ``--json``. Every failure exits with 1.
"""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from kitchensync.cli.json_formatter import format_json_output
from kitchensync.shared.errors import (
    ApplicationError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    KitchenSyncError,
    ProviderError,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1

error_console = Console(stderr=True)


def describe_error(error: Exception) -> str:
    """One-line, user-facing description of an error."""
    if isinstance(error, ProviderError):
        return f"Provider error (HTTP {error.status_code}): {error.message}"
    if isinstance(error, DomainError):
        if error.code == ErrorCode.VALIDATION_ERROR:
            return f"Invalid input: {error.message}"
        return f"Unexpected provider data: {error.message}"
    if isinstance(error, InfrastructureError):
        return f"Infrastructure error: {error.message}"
    if isinstance(error, ApplicationError):
        return f"Application error: {error.message}"
    if isinstance(error, KeyboardInterrupt):
        return "Command interrupted by user"
    return f"Unexpected error: {error}"


def _error_details(error: Exception) -> dict[str, Any]:
    if isinstance(error, KitchenSyncError):
        return error.to_dict()
    return {"error_type": type(error).__name__}


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    message = describe_error(error)  # type: ignore[arg-type]
    expected = isinstance(error, (KitchenSyncError, KeyboardInterrupt))
    logger.debug(
        "Command '%s' failed: %s",
        command,
        message,
        extra={"operation": command, "context": {"error_type": type(error).__name__}},
        exc_info=not expected,
    )

    if json_output:
        output = format_json_output(
            success=False,
            command=command,
            data=_error_details(error),  # type: ignore[arg-type]
            errors=[message],
        )
        typer.echo(output.decode("utf-8"))
    else:
        error_console.print(f"[red bold]Error:[/red bold] {escape(message)}", highlight=False)
        if isinstance(error, ProviderError) and error.body:
            error_console.print(f"[dim]{escape(str(error.body))}[/dim]", highlight=False)

    return EXIT_ERROR
