"""
KitchenSync Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m kitchensync`. It delegates to the Typer application.
"""

import logging
import sys

from kitchensync.cli.error_handler import EXIT_ERROR, handle_cli_error
from kitchensync.cli.typer_app import app

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(EXIT_ERROR)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        sys.exit(handle_cli_error(e, "kitchensync-main"))


if __name__ == "__main__":
    main()
