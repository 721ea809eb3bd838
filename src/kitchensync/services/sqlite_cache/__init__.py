"""SQLite-backed cache store."""

from kitchensync.services.sqlite_cache.cache_db import SQLiteCacheDB

__all__ = ["SQLiteCacheDB"]
