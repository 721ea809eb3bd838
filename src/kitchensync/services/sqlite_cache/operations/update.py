"""Delete operations for SQLite cache maintenance.

Lookups never call these; they back the explicit maintenance commands.
"""

from __future__ import annotations

import logging
from datetime import datetime

from kitchensync.services.sqlite_cache.operations.base import (
    TABLE,
    BaseOperation,
    format_timestamp,
)

logger = logging.getLogger(__name__)


class UpdateOperations(BaseOperation):
    """Delete operations for cache management."""

    def delete(self, key: str) -> bool:
        self._validate_connection()

        cursor = self.conn.execute(
            f"DELETE FROM {TABLE} WHERE cache_key = ?",  # noqa: S608
            (key,),
        )
        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("Cache deleted: key=%s", key[:60])
        return deleted

    def purge_expired(self, now: datetime) -> int:
        """Delete entries that are no longer fresh.

        Returns:
            Number of purged entries
        """
        self._validate_connection()

        cursor = self.conn.execute(
            f"DELETE FROM {TABLE} WHERE expires_at IS NULL OR expires_at <= ?",  # noqa: S608
            (format_timestamp(now),),
        )
        purged_count = cursor.rowcount

        if purged_count > 0:
            logger.info("Purged %d expired cache entries", purged_count)

        return purged_count

    def clear(self, namespace: str | None = None) -> int:
        """Delete every entry, or only those of one namespace.

        Returns:
            Number of cleared entries
        """
        self._validate_connection()

        if namespace:
            cursor = self.conn.execute(
                f"DELETE FROM {TABLE} WHERE substr(cache_key, 1, ?) = ?",  # noqa: S608
                (len(namespace) + 1, f"{namespace}:"),
            )
            logger.info("Cleared cache namespace: %s", namespace)
        else:
            cursor = self.conn.execute(f"DELETE FROM {TABLE}")  # noqa: S608
            logger.info("Cleared all cache entries")

        return cursor.rowcount
