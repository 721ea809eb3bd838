"""Projection helpers for untyped provider JSON.

Provider payloads may omit fields or carry unexpected types. Optional
fields are coerced when possible and otherwise dropped to ``None``; only
the identifying fields of an item are required, and a missing one raises
NormalizationError.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from kitchensync.shared.errors import ErrorContext, NormalizationError


def as_mapping(value: Any) -> dict[str, Any]:
    """Return value if it is a JSON object, otherwise an empty dict."""
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def as_list(value: Any) -> list[Any]:
    """Return value if it is a JSON array, otherwise an empty list."""
    if isinstance(value, list):
        return value
    return []


def optional_str(value: Any) -> str | None:
    """Trimmed non-empty string or None."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def optional_number(value: Any) -> float | int | None:
    """Finite number or None. Numeric strings are coerced, booleans rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def optional_int(value: Any) -> int | None:
    """Integral number or None."""
    number = optional_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            return None
        return int(number)
    return number


def string_list(value: Any) -> list[str]:
    """List of trimmed non-empty strings; other entries are dropped."""
    return [text for text in (optional_str(item) for item in as_list(value)) if text]


def require_int(data: Mapping[str, Any], field: str, entity: str) -> int:
    """Read an identifying integer field.

    Raises:
        NormalizationError: If the field is absent or not an integer
    """
    value = data.get(field)
    number = optional_int(value) if not isinstance(value, str) else None
    if number is None and isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    if number is None:
        raise NormalizationError(
            f"{entity} payload has no valid '{field}'",
            ErrorContext(
                operation="normalize",
                additional_data={"entity": entity, "field": field},
            ),
        )
    return number


def require_text(data: Mapping[str, Any], field: str, entity: str) -> str:
    """Read an identifying text field.

    Raises:
        NormalizationError: If the field is absent or empty
    """
    text = optional_str(data.get(field))
    if text is None:
        raise NormalizationError(
            f"{entity} payload has no valid '{field}'",
            ErrorContext(
                operation="normalize",
                additional_data={"entity": entity, "field": field},
            ),
        )
    return text
