"""Query operations for SQLite cache."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from kitchensync.services.cache_models import CacheEntry
from kitchensync.services.sqlite_cache.operations.base import (
    TABLE,
    BaseOperation,
    format_timestamp,
    parse_timestamp,
)

logger = logging.getLogger(__name__)


class QueryOperations(BaseOperation):
    """Query operations for cache retrieval."""

    def get(self, key: str) -> CacheEntry | None:
        """Fetch the entry stored under key, fresh or not.

        A row whose payload or timestamp cannot be decoded is reported as
        absent.
        """
        self._validate_connection()

        cursor = self.conn.execute(
            f"SELECT cache_key, results, expires_at, updated_at FROM {TABLE} WHERE cache_key = ?",  # noqa: S608
            (key,),
        )
        row = cursor.fetchone()
        if row is None:
            return None

        cache_key, results_json, expires_at_str, updated_at_str = row
        try:
            payload: Any = json.loads(results_json)
            return CacheEntry(
                cache_key=cache_key,
                payload=payload,
                expires_at=parse_timestamp(expires_at_str),
                updated_at=parse_timestamp(updated_at_str),
            )
        except (ValueError, TypeError) as e:
            logger.warning(
                "Discarding undecodable cache row %s: %s",
                key[:60],
                str(e),
            )
            return None

    def count(self, now: datetime | None = None) -> int:
        """Count all entries, or only the fresh ones when now is given."""
        self._validate_connection()

        if now is None:
            cursor = self.conn.execute(f"SELECT COUNT(*) FROM {TABLE}")  # noqa: S608
        else:
            cursor = self.conn.execute(
                f"SELECT COUNT(*) FROM {TABLE} WHERE expires_at > ?",  # noqa: S608
                (format_timestamp(now),),
            )
        return int(cursor.fetchone()[0])

    def total_size(self) -> int:
        self._validate_connection()
        cursor = self.conn.execute(f"SELECT SUM(length(results)) FROM {TABLE}")  # noqa: S608
        return int(cursor.fetchone()[0] or 0)

    def count_by_namespace(self) -> dict[str, int]:
        """Number of entries per cache key namespace."""
        self._validate_connection()
        cursor = self.conn.execute(
            f"""
            SELECT substr(cache_key, 1, instr(cache_key, ':') - 1) AS namespace,
                   COUNT(*)
            FROM {TABLE}
            GROUP BY namespace
            ORDER BY namespace
            """  # noqa: S608
        )
        return {namespace or "": int(count) for namespace, count in cursor.fetchall()}
