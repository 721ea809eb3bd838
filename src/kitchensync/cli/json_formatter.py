"""
JSON Output Formatter for the KitchenSync CLI

Every command run with ``--json`` prints one envelope produced here.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "groceries search")
        data: The command's output data
        errors: List of error messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> print(format_json_output(True, "cache purge", {"purged": 3}).decode())
        {
          "command": "cache purge",
          "data": {
            "purged": 3
          },
          "errors": [],
          "success": true,
          "timestamp": "2026-10-18T10:30:00+00:00"
        }
    """
    if errors is None:
        errors = []
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
    }

    return orjson.dumps(
        json_data,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        default=str,
    )
