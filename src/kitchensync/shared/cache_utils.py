"""Cache key derivation for provider lookups.

Identical logical requests must produce identical cache keys, across calls
and across process restarts. Each lookup domain declares the fields that
identify a request; this module canonicalizes their values and hashes them
into a namespaced key.

Canonicalization rules:
    - strings are trimmed, inner whitespace collapsed and case-folded
    - lists are canonicalized per entry, empties dropped, de-duplicated
      and sorted lexicographically
    - the field mapping is serialized as compact JSON in the order the
      domain declares it, so renaming or reordering fields changes keys

Example:
    >>> derive_cache_key("groceries", {"query": canonical_text(" Milk "), "number": 12})
    'groceries:...'  # 64 hex characters after the colon
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any


def canonical_text(value: str | None, *, case_insensitive: bool = True) -> str:
    """Normalize a free-text parameter.

    Args:
        value: Raw text. None is treated as empty.
        case_insensitive: Case-fold the result (default True)

    Returns:
        Trimmed text with runs of whitespace collapsed to a single space.
    """
    if not value:
        return ""
    text = " ".join(value.split())
    return text.casefold() if case_insensitive else text


def canonical_list(
    values: Iterable[str] | str | None,
    *,
    case_insensitive: bool = True,
) -> list[str]:
    """Normalize a list parameter into a sorted set of canonical entries.

    A single comma-separated string is accepted as well, so
    ``"dairy, gluten"`` and ``["Gluten", "dairy"]`` canonicalize the same.
    """
    if not values:
        return []
    if isinstance(values, str):
        values = values.split(",")
    canonical = {
        canonical_text(item, case_insensitive=case_insensitive)
        for item in values
        if isinstance(item, str)
    }
    canonical.discard("")
    return sorted(canonical)


def serialize_key_fields(fields: Mapping[str, Any]) -> str:
    """Serialize key fields as compact JSON preserving declaration order."""
    return json.dumps(
        dict(fields),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def derive_cache_key(namespace: str, fields: Mapping[str, Any]) -> str:
    """Derive the cache key for a canonical request.

    Args:
        namespace: Domain namespace, e.g. "ingredients". Must be non-empty.
        fields: Canonicalized identifying fields in domain order

    Returns:
        ``"<namespace>:<sha256 hex digest>"``

    Raises:
        ValueError: If namespace is empty
    """
    if not namespace:
        raise ValueError("namespace cannot be empty")

    digest = hashlib.sha256(serialize_key_fields(fields).encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"
