"""Base operation class for SQLite cache operations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from kitchensync.shared.constants import CacheConfig

if TYPE_CHECKING:
    import sqlite3

logger = logging.getLogger(__name__)

TABLE = CacheConfig.TABLE_NAME


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime as an ISO string in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp into an aware UTC datetime."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BaseOperation:
    """Base class for cache operations with shared functionality."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _validate_connection(self) -> None:
        """Raise RuntimeError if the connection has been released."""
        if self.conn is None:
            raise RuntimeError("Database connection not initialized")
