"""Process-local cache store.

Same contract as the SQLite store, kept in a dictionary. Payloads are held
in serialized form so callers can never mutate a cached result in place.
Entries live until they are overwritten or the process exits.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from kitchensync.services.cache_models import CacheEntry, is_fresh, utc_now
from kitchensync.shared.constants import CacheConfig
from kitchensync.shared.errors import create_cache_error

logger = logging.getLogger(__name__)


class MemoryCacheStore:
    """In-memory key-value cache with time-based expiry."""

    def __init__(
        self,
        default_ttl: int = CacheConfig.DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[str, datetime | None, datetime]] = {}

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            stored = self._entries.get(key)
        if stored is None:
            return None
        results_json, expires_at, updated_at = stored
        return CacheEntry(
            cache_key=key,
            payload=json.loads(results_json),
            expires_at=expires_at,
            updated_at=updated_at,
        )

    def set(self, key: str, payload: Any, ttl_seconds: float | None = None) -> CacheEntry:
        """Upsert payload under key.

        Raises:
            CacheStorageError: If the payload is not JSON-serializable
        """
        try:
            results_json = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise create_cache_error(
                f"Cache set failed: {e!s}",
                operation="set",
                cache_key=key,
                original_error=e,
            ) from e

        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        now = self._clock()
        expires_at = now + timedelta(seconds=ttl)
        with self._lock:
            self._entries[key] = (results_json, expires_at, now)
        return CacheEntry(cache_key=key, payload=payload, expires_at=expires_at, updated_at=now)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [
                key
                for key, (_, expires_at, _) in self._entries.items()
                if not is_fresh(expires_at, now)
            ]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.info("Purged %d expired cache entries", len(stale))
        return len(stale)

    def clear(self, namespace: str | None = None) -> int:
        with self._lock:
            if namespace:
                prefix = f"{namespace}:"
                keys = [key for key in self._entries if key.startswith(prefix)]
            else:
                keys = list(self._entries)
            for key in keys:
                del self._entries[key]
        return len(keys)

    def get_cache_info(self) -> dict[str, Any]:
        now = self._clock()
        with self._lock:
            entries = dict(self._entries)
        valid = sum(1 for _, expires_at, _ in entries.values() if is_fresh(expires_at, now))
        namespaces: dict[str, int] = {}
        for key in sorted(entries):
            namespace = key.split(":", 1)[0] if ":" in key else ""
            namespaces[namespace] = namespaces.get(namespace, 0) + 1
        return {
            "backend": CacheConfig.BACKEND_MEMORY,
            "location": "memory",
            "total_entries": len(entries),
            "valid_entries": valid,
            "expired_entries": len(entries) - valid,
            "total_size_bytes": sum(len(results) for results, _, _ in entries.values()),
            "namespaces": namespaces,
        }

    def close(self) -> None:
        with self._lock:
            self._entries.clear()
