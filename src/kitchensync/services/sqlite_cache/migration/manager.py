"""Migration manager for SQLite cache.

This module creates the cache schema and records its version.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class MigrationManager:
    """Database schema migration manager."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._current_version = self._get_current_version()

    def _get_current_version(self) -> int:
        cursor = self.conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
        )
        if cursor.fetchone() is None:
            return 0

        cursor = self.conn.execute("SELECT MAX(version) FROM schema_version")
        row = cursor.fetchone()
        return row[0] if row and row[0] is not None else 0

    def create_tables(self) -> None:
        """Create database schema (v1) if it does not exist yet."""
        if self._current_version >= SCHEMA_VERSION:
            return

        schema_sql = """
        CREATE TABLE IF NOT EXISTS recipe_cache (
            cache_key TEXT PRIMARY KEY,

            -- Normalized lookup result (JSON)
            results TEXT NOT NULL,

            -- TTL and metadata
            expires_at TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP NOT NULL,

            CHECK (length(cache_key) > 0)
        );

        CREATE INDEX IF NOT EXISTS idx_recipe_cache_expires_at
            ON recipe_cache(expires_at);

        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP NOT NULL
        );
        """

        self.conn.executescript(schema_sql)
        self.conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        self._current_version = SCHEMA_VERSION

        logger.info("Created cache database schema (v%d)", SCHEMA_VERSION)
