"""Shared utility helpers."""

from .payload import (
    as_list,
    as_mapping,
    optional_int,
    optional_number,
    optional_str,
    require_int,
    require_text,
    string_list,
)

__all__ = [
    "as_list",
    "as_mapping",
    "optional_int",
    "optional_number",
    "optional_str",
    "require_int",
    "require_text",
    "string_list",
]
