"""Command-line interface for KitchenSync."""

from kitchensync.cli.typer_app import app

__all__ = ["app"]
