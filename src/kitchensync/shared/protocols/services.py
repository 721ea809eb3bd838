"""Service protocols for dependency inversion.

The read-through lookup depends on these interfaces only, so any cache
backend or provider client can be injected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from kitchensync.services.cache_models import CacheEntry
    from kitchensync.services.lookups.base import ProviderRequest


class CacheStoreProtocol(Protocol):
    """Key-value store with get and set-with-expiry.

    Example:
        >>> store: CacheStoreProtocol = MemoryCacheStore()
        >>> store.set("map:ab12...", {"results": []}, ttl_seconds=60)
    """

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry stored under key, fresh or stale, or None.

        Raises:
            CacheStorageError: If the store cannot be read
        """

    def set(self, key: str, payload: Any, ttl_seconds: float | None = None) -> CacheEntry:
        """Upsert payload under key with an expiry ttl_seconds from now.

        Raises:
            CacheStorageError: If the store cannot be written
        """


class ProviderClientProtocol(Protocol):
    """The "perform external call" capability."""

    def fetch(self, request: ProviderRequest) -> Any:
        """Perform one throttled provider call and return the decoded JSON body.

        Raises:
            ProviderError: Non-success HTTP status
            TransportError: Connection failure or timeout
            NormalizationError: Success response that is not JSON
        """
