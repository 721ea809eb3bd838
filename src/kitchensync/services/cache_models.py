"""Cache entry model.

This module defines the record held by every cache store: an opaque key,
the already-normalized lookup result and an absolute expiry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

__all__ = ["CacheEntry", "is_fresh", "utc_now"]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def is_fresh(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """Return True when an entry may still be served.

    An entry without an expiry is never fresh, and an entry expiring
    exactly at ``now`` is already stale.
    """
    if expires_at is None:
        return False
    if now is None:
        now = utc_now()
    return expires_at > now


@dataclass
class CacheEntry:
    """A cached lookup result.

    Attributes:
        cache_key: Namespaced key, e.g. "groceries:<sha256 hex>"
        payload: Normalized lookup result (JSON-compatible)
        expires_at: Absolute expiry, None if unknown
        updated_at: Time of the last upsert, if the store records it
    """

    cache_key: str
    payload: Any
    expires_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.cache_key or not self.cache_key.strip():
            msg = "cache_key must be non-empty"
            raise ValueError(msg)

        if self.expires_at is not None and self.expires_at.tzinfo is None:
            self.expires_at = self.expires_at.replace(tzinfo=timezone.utc)

    def is_fresh(self, now: datetime | None = None) -> bool:
        return is_fresh(self.expires_at, now)
