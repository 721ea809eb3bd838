"""Insert operations for SQLite cache."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from typing import Any

from kitchensync.services.sqlite_cache.operations.base import (
    TABLE,
    BaseOperation,
    format_timestamp,
)

logger = logging.getLogger(__name__)


class InsertOperations(BaseOperation):
    """Upsert operations for cache storage."""

    def upsert(
        self,
        key: str,
        payload: Any,
        ttl_seconds: float,
        now: datetime,
    ) -> datetime:
        """Insert or overwrite the entry stored under key.

        The last writer wins: payload and expiry are replaced wholesale.

        Returns:
            The expiry timestamp that was written

        Raises:
            TypeError, ValueError: If payload is not JSON-serializable
            sqlite3.Error: If the statement fails
        """
        self._validate_connection()

        results_json = json.dumps(payload, ensure_ascii=False)
        expires_at = now + timedelta(seconds=ttl_seconds)

        upsert_sql = f"""
        INSERT INTO {TABLE} (cache_key, results, expires_at, updated_at)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(cache_key) DO UPDATE SET
            results = excluded.results,
            expires_at = excluded.expires_at,
            updated_at = excluded.updated_at
        """  # noqa: S608
        self.conn.execute(
            upsert_sql,
            (key, results_json, format_timestamp(expires_at), format_timestamp(now)),
        )

        logger.debug(
            "Cache upserted: key=%s, size=%d bytes, ttl=%ss",
            key[:60],
            len(results_json),
            ttl_seconds,
        )
        return expires_at
