"""Schema management for the SQLite cache."""

from kitchensync.services.sqlite_cache.migration.manager import MigrationManager

__all__ = ["MigrationManager"]
