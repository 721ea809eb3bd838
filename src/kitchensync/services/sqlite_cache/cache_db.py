"""SQLite cache database facade.

This module provides the durable cache store behind the read-through
lookups: a single ``recipe_cache`` table keyed by namespaced cache key,
holding normalized results as JSON with an absolute expiry.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from kitchensync.services.cache_models import CacheEntry, utc_now
from kitchensync.services.sqlite_cache.migration.manager import MigrationManager
from kitchensync.services.sqlite_cache.operations.insert import InsertOperations
from kitchensync.services.sqlite_cache.operations.query import QueryOperations
from kitchensync.services.sqlite_cache.operations.update import UpdateOperations
from kitchensync.shared.constants import CacheConfig
from kitchensync.shared.errors import (
    CacheStorageError,
    ErrorCode,
    ErrorContext,
    create_cache_error,
)
from kitchensync.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


class SQLiteCacheDB:
    """SQLite-based key-value cache with time-based expiry.

    Uses WAL mode so readers do not block the writer. One connection is
    shared by all threads and serialized with a lock.

    Attributes:
        db_path: Path to SQLite database file
        default_ttl: TTL used when set() is called without one
        conn: SQLite database connection

    Example:
        >>> cache = SQLiteCacheDB(Path("cache.db"))
        >>> cache.set("groceries:ab12...", {"results": []}, ttl_seconds=3600)
        >>> cache.get("groceries:ab12...").payload
        {'results': []}
        >>> cache.close()
    """

    def __init__(
        self,
        db_path: Path | str = CacheConfig.DEFAULT_DB_PATH,
        default_ttl: int = CacheConfig.DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize SQLite cache database.

        Args:
            db_path: Path to SQLite database file
            default_ttl: Default time-to-live in seconds
            clock: Source of the current UTC time

        Raises:
            CacheStorageError: If database initialization fails
        """
        self.db_path = Path(db_path)
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.RLock()
        self.conn: sqlite3.Connection | None = None
        self._initialize_db()

    def _initialize_db(self) -> None:
        context = ErrorContext(
            operation="initialize_db",
            additional_data={"db_path": str(self.db_path)},
        )

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,
            )
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA synchronous=NORMAL")

            MigrationManager(self.conn).create_tables()

            self._query_ops = QueryOperations(self.conn)
            self._insert_ops = InsertOperations(self.conn)
            self._update_ops = UpdateOperations(self.conn)

            log_operation_success(
                logger=logger,
                operation="initialize_db",
                duration_ms=0,
                context=context,
            )

        except (sqlite3.Error, OSError) as e:
            error = CacheStorageError(
                code=ErrorCode.CACHE_ERROR,
                message=f"Failed to initialize SQLite cache: {e!s}",
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error, operation="initialize_db")
            raise error from e

    @contextmanager
    def _guard(self, operation: str, key: str | None = None) -> Iterator[None]:
        """Serialize access and translate storage failures."""
        with self._lock:
            if self.conn is None:
                raise create_cache_error(
                    "Database connection is closed",
                    operation=operation,
                    cache_key=key,
                )
            try:
                yield
            except (sqlite3.Error, TypeError, ValueError) as e:
                raise create_cache_error(
                    f"Cache {operation} failed: {e!s}",
                    operation=operation,
                    cache_key=key,
                    original_error=e,
                ) from e

    def get(self, key: str) -> CacheEntry | None:
        """Retrieve the entry stored under key, fresh or stale.

        Args:
            key: Cache key identifier

        Returns:
            The stored entry, or None if there is none

        Raises:
            CacheStorageError: If the database cannot be read
        """
        with self._guard("get", key):
            return self._query_ops.get(key)

    def set(self, key: str, payload: Any, ttl_seconds: float | None = None) -> CacheEntry:
        """Upsert payload under key, expiring ``ttl_seconds`` from now.

        Args:
            key: Cache key identifier
            payload: JSON-serializable normalized result
            ttl_seconds: Time-to-live in seconds (None for the default TTL)

        Returns:
            The entry as written

        Raises:
            CacheStorageError: If the payload cannot be serialized or written
        """
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        now = self._clock()
        with self._guard("set", key):
            expires_at = self._insert_ops.upsert(key, payload, ttl, now)
        return CacheEntry(cache_key=key, payload=payload, expires_at=expires_at, updated_at=now)

    def delete(self, key: str) -> bool:
        """Delete the entry stored under key. Returns True if one existed."""
        with self._guard("delete", key):
            return self._update_ops.delete(key)

    def purge_expired(self) -> int:
        """Delete stale entries.

        Returns:
            Number of purged entries
        """
        now = self._clock()
        with self._guard("purge_expired"):
            return self._update_ops.purge_expired(now)

    def clear(self, namespace: str | None = None) -> int:
        """Delete all entries, or those of one namespace.

        Returns:
            Number of cleared entries
        """
        with self._guard("clear"):
            return self._update_ops.clear(namespace)

    def get_cache_info(self) -> dict[str, Any]:
        """Get cache statistics and metadata.

        Returns:
            Dictionary with cache information:
            - backend: "sqlite"
            - location: database file path
            - total_entries: number of stored entries
            - valid_entries: number of fresh entries
            - expired_entries: number of stale entries
            - total_size_bytes: size of stored payloads
            - namespaces: entry count per namespace

        Raises:
            CacheStorageError: If the database cannot be read
        """
        now = self._clock()
        with self._guard("get_cache_info"):
            total = self._query_ops.count()
            valid = self._query_ops.count(now)
            return {
                "backend": CacheConfig.BACKEND_SQLITE,
                "location": str(self.db_path),
                "total_entries": total,
                "valid_entries": valid,
                "expired_entries": total - valid,
                "total_size_bytes": self._query_ops.total_size(),
                "namespaces": self._query_ops.count_by_namespace(),
            }

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self.conn:
                self.conn.close()
                self.conn = None
                logger.debug("Closed SQLite cache connection: %s", self.db_path)
