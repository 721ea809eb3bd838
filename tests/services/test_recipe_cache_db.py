"""
Tests for the SQLite cache store.
"""

import sqlite3
from datetime import timedelta

import pytest

from kitchensync.services.sqlite_cache import SQLiteCacheDB
from kitchensync.services.sqlite_cache.operations.base import format_timestamp
from kitchensync.shared.errors import CacheStorageError, ErrorCode

KEY = "groceries:" + "a" * 64


class TestSQLiteCacheDBInit:
    """Test database initialization."""

    def test_creates_file_and_schema(self, sqlite_store):
        assert sqlite_store.db_path.exists()

        tables = {
            row[0]
            for row in sqlite_store.conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )
        }
        assert {"recipe_cache", "schema_version"} <= tables

    def test_wal_mode_enabled(self, sqlite_store):
        mode = sqlite_store.conn.execute("PRAGMA journal_mode").fetchone()[0]

        assert mode.lower() == "wal"

    def test_reopen_keeps_entries(self, tmp_path, clock):
        db_path = tmp_path / "cache.db"
        first = SQLiteCacheDB(db_path, clock=clock)
        first.set(KEY, {"results": [1]}, ttl_seconds=60)
        first.close()

        second = SQLiteCacheDB(db_path, clock=clock)
        try:
            assert second.get(KEY).payload == {"results": [1]}
        finally:
            second.close()


class TestSQLiteCacheDBGetSet:
    """Test get/set behavior."""

    def test_get_missing_returns_none(self, sqlite_store):
        assert sqlite_store.get(KEY) is None

    def test_set_then_get(self, sqlite_store, clock):
        # Given
        payload = {"results": [{"id": 1, "title": "Whole Milk", "image": None}], "totalResults": 1}

        # When
        written = sqlite_store.set(KEY, payload, ttl_seconds=3600)
        entry = sqlite_store.get(KEY)

        # Then
        assert entry.payload == payload
        assert entry.expires_at == clock.now + timedelta(seconds=3600)
        assert entry.updated_at == clock.now
        assert written.expires_at == entry.expires_at

    def test_timestamps_stored_as_utc_iso(self, sqlite_store, clock):
        sqlite_store.set(KEY, [], ttl_seconds=10)

        row = sqlite_store.conn.execute(
            "SELECT expires_at, updated_at FROM recipe_cache WHERE cache_key = ?",
            (KEY,),
        ).fetchone()

        assert row == (
            format_timestamp(clock.now + timedelta(seconds=10)),
            format_timestamp(clock.now),
        )
        assert row[0].endswith("+00:00")

    def test_default_ttl(self, tmp_path, clock):
        store = SQLiteCacheDB(tmp_path / "cache.db", default_ttl=120, clock=clock)
        try:
            entry = store.set(KEY, {})
            assert entry.expires_at == clock.now + timedelta(seconds=120)
        finally:
            store.close()

    def test_stale_entries_are_still_returned(self, sqlite_store, clock):
        """get() returns stale entries; callers decide about freshness."""
        sqlite_store.set(KEY, {"results": []}, ttl_seconds=60)

        clock.advance(seconds=60)
        entry = sqlite_store.get(KEY)

        assert entry is not None
        assert not entry.is_fresh(clock.now)

    def test_upsert_replaces_payload_and_expiry(self, sqlite_store, clock):
        sqlite_store.set(KEY, {"v": 1}, ttl_seconds=60)
        clock.advance(seconds=30)

        sqlite_store.set(KEY, {"v": 2}, ttl_seconds=600)
        entry = sqlite_store.get(KEY)

        assert entry.payload == {"v": 2}
        assert entry.expires_at == clock.now + timedelta(seconds=600)
        assert sqlite_store.get_cache_info()["total_entries"] == 1

    def test_empty_results_are_cached(self, sqlite_store):
        sqlite_store.set(KEY, {"results": [], "totalResults": 0}, ttl_seconds=60)

        assert sqlite_store.get(KEY).payload == {"results": [], "totalResults": 0}

    def test_non_ascii_payload(self, sqlite_store):
        sqlite_store.set(KEY, {"title": "Crème fraîche"}, ttl_seconds=60)

        assert sqlite_store.get(KEY).payload == {"title": "Crème fraîche"}

    def test_unserializable_payload_raises_cache_error(self, sqlite_store):
        with pytest.raises(CacheStorageError) as exc_info:
            sqlite_store.set(KEY, {"bad": object()}, ttl_seconds=60)

        assert exc_info.value.code == ErrorCode.CACHE_WRITE_FAILED

    def test_undecodable_row_is_absent(self, sqlite_store):
        sqlite_store.conn.execute(
            "INSERT INTO recipe_cache (cache_key, results, expires_at, updated_at) "
            "VALUES (?, ?, ?, ?)",
            (KEY, "{not json", "2999-01-01T00:00:00.000000+00:00", "2026-01-01T00:00:00.000000+00:00"),
        )

        assert sqlite_store.get(KEY) is None


class TestSQLiteCacheDBMaintenance:
    """Test delete, purge, clear and info."""

    def test_delete(self, sqlite_store):
        sqlite_store.set(KEY, {}, ttl_seconds=60)

        assert sqlite_store.delete(KEY) is True
        assert sqlite_store.delete(KEY) is False
        assert sqlite_store.get(KEY) is None

    def test_purge_expired_removes_only_stale(self, sqlite_store, clock):
        # Given
        sqlite_store.set("groceries:old", {}, ttl_seconds=10)
        sqlite_store.set("groceries:edge", {}, ttl_seconds=20)
        sqlite_store.set("groceries:new", {}, ttl_seconds=3600)

        # When: the edge entry expires exactly now
        clock.advance(seconds=20)
        purged = sqlite_store.purge_expired()

        # Then
        assert purged == 2
        assert sqlite_store.get("groceries:new") is not None
        assert sqlite_store.get("groceries:edge") is None

    def test_clear_namespace(self, sqlite_store):
        sqlite_store.set("groceries:one", {}, ttl_seconds=60)
        sqlite_store.set("grocery-product:two", {}, ttl_seconds=60)
        sqlite_store.set("map:three", {}, ttl_seconds=60)

        cleared = sqlite_store.clear("groceries")

        assert cleared == 1
        assert sqlite_store.get("grocery-product:two") is not None
        assert sqlite_store.get_cache_info()["namespaces"] == {
            "grocery-product": 1,
            "map": 1,
        }

    def test_clear_all(self, sqlite_store):
        sqlite_store.set("groceries:one", {}, ttl_seconds=60)
        sqlite_store.set("map:two", {}, ttl_seconds=60)

        assert sqlite_store.clear() == 2
        assert sqlite_store.get_cache_info()["total_entries"] == 0

    def test_cache_info(self, sqlite_store, clock):
        sqlite_store.set("groceries:one", {"a": 1}, ttl_seconds=10)
        sqlite_store.set("groceries:two", {"b": 2}, ttl_seconds=100)
        clock.advance(seconds=50)

        info = sqlite_store.get_cache_info()

        assert info["backend"] == "sqlite"
        assert info["location"] == str(sqlite_store.db_path)
        assert info["total_entries"] == 2
        assert info["valid_entries"] == 1
        assert info["expired_entries"] == 1
        assert info["total_size_bytes"] > 0
        assert info["namespaces"] == {"groceries": 2}


class TestSQLiteCacheDBFailures:
    """Test storage failure translation."""

    def test_closed_store_raises_cache_error(self, tmp_path, clock):
        store = SQLiteCacheDB(tmp_path / "cache.db", clock=clock)
        store.close()

        with pytest.raises(CacheStorageError) as exc_info:
            store.get(KEY)

        assert exc_info.value.code == ErrorCode.CACHE_READ_FAILED

    def test_close_is_idempotent(self, tmp_path, clock):
        store = SQLiteCacheDB(tmp_path / "cache.db", clock=clock)
        store.close()
        store.close()

        assert store.conn is None

    def test_sqlite_errors_are_wrapped(self, sqlite_store, mocker):
        mocker.patch.object(
            sqlite_store._query_ops,
            "get",
            side_effect=sqlite3.OperationalError("database is locked"),
        )

        with pytest.raises(CacheStorageError) as exc_info:
            sqlite_store.get(KEY)

        assert isinstance(exc_info.value.original_error, sqlite3.OperationalError)

    def test_unopenable_path_raises_cache_error(self, tmp_path, clock):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(CacheStorageError) as exc_info:
            SQLiteCacheDB(blocker / "cache.db", clock=clock)

        assert exc_info.value.code == ErrorCode.CACHE_ERROR
