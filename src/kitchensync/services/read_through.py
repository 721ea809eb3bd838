"""Read-through lookup orchestration.

One lookup runs the same pipeline for every domain::

    validate -> derive key -> cache get
        fresh hit  -> rehydrate, cached=True (no throttle, no network)
        otherwise  -> throttled provider call -> normalize -> cache set
                      -> cached=False

Cache store failures degrade to a miss (on read) or are dropped (on
write); every other failure propagates to the caller and nothing is
cached for it.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from kitchensync.services.cache_models import utc_now
from kitchensync.services.lookups.base import LookupStrategy
from kitchensync.services.lookups.models import LookupResponse
from kitchensync.shared.errors import CacheStorageError, KitchenSyncError, NormalizationError
from kitchensync.shared.logging import (
    log_cache_event,
    log_operation_error,
    log_operation_success,
)
from kitchensync.shared.protocols import CacheStoreProtocol, ProviderClientProtocol

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT")
ResponseT = TypeVar("ResponseT", bound=LookupResponse[Any])


class ReadThroughLookup:
    """Serve lookups from the cache, falling back to the provider.

    Args:
        cache_store: Store consulted before and written after each provider call
        client: Provider client performing the throttled call
        default_ttl: Lifetime of cached answers when a domain does not set one
        clock: Source of "now" for freshness checks
    """

    def __init__(
        self,
        cache_store: CacheStoreProtocol,
        client: ProviderClientProtocol,
        default_ttl: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.cache_store = cache_store
        self.client = client
        self.default_ttl = default_ttl
        self._clock = clock
        self._stats_lock = threading.Lock()
        self._stats = {
            "cache_hits": 0,
            "cache_misses": 0,
            "provider_calls": 0,
            "cache_errors": 0,
            "errors": 0,
        }

    def execute(self, strategy: LookupStrategy[ParamsT, ResponseT], params: ParamsT) -> ResponseT:
        """Run one lookup.

        Raises:
            DomainError: Invalid parameters, or a provider payload missing an
                identifying field
            ProviderError: Non-success provider status
            TransportError: Provider unreachable or timed out
            ConfigurationError: Provider credentials missing
        """
        start_time = time.perf_counter()
        strategy.validate(params)
        cache_key = strategy.cache_key(params)

        cached = self._read_cached(strategy, params, cache_key)
        if cached is not None:
            self._bump("cache_hits")
            log_operation_success(
                logger,
                strategy.operation,
                (time.perf_counter() - start_time) * 1000,
                result_info={"cached": True, "total_results": cached.total_results},
                context={"cache_key": cache_key},
            )
            return cached

        self._bump("cache_misses")
        try:
            self._bump("provider_calls")
            raw = self.client.fetch(strategy.build_request(params))
            response = strategy.normalize(raw, params, cache_key)
        except KitchenSyncError as e:
            self._bump("errors")
            log_operation_error(
                logger,
                e,
                operation=strategy.operation,
                context={"cache_key": cache_key},
                level=logging.WARNING,
            )
            raise

        self._write_cached(strategy, params, cache_key, response)
        log_operation_success(
            logger,
            strategy.operation,
            (time.perf_counter() - start_time) * 1000,
            result_info={"cached": False, "total_results": response.total_results},
            context={"cache_key": cache_key},
        )
        return response

    def _read_cached(
        self,
        strategy: LookupStrategy[ParamsT, ResponseT],
        params: ParamsT,
        cache_key: str,
    ) -> ResponseT | None:
        try:
            entry = self.cache_store.get(cache_key)
        except CacheStorageError as e:
            self._bump("cache_errors")
            log_operation_error(logger, e, operation="cache_get", level=logging.WARNING)
            return None

        if entry is None:
            log_cache_event(logger, "miss", cache_key)
            return None
        if not entry.is_fresh(self._clock()):
            log_cache_event(logger, "stale", cache_key, {"expires_at": str(entry.expires_at)})
            return None

        try:
            response = strategy.rehydrate(entry.payload, params, cache_key)
        except NormalizationError as e:
            self._bump("cache_errors")
            log_operation_error(logger, e, operation="cache_rehydrate", level=logging.WARNING)
            return None

        log_cache_event(logger, "hit", cache_key)
        return response

    def _write_cached(
        self,
        strategy: LookupStrategy[ParamsT, ResponseT],
        params: ParamsT,
        cache_key: str,
        response: ResponseT,
    ) -> None:
        ttl = strategy.ttl_seconds(params)
        if ttl is None:
            ttl = self.default_ttl
        try:
            self.cache_store.set(cache_key, strategy.to_cache_payload(response), ttl_seconds=ttl)
        except CacheStorageError as e:
            self._bump("cache_errors")
            log_operation_error(logger, e, operation="cache_set", level=logging.WARNING)
            return
        log_cache_event(logger, "write", cache_key, {"ttl_seconds": ttl})

    def _bump(self, counter: str) -> None:
        with self._stats_lock:
            self._stats[counter] += 1

    def get_stats(self) -> dict[str, Any]:
        with self._stats_lock:
            stats: dict[str, Any] = dict(self._stats)
        lookups = stats["cache_hits"] + stats["cache_misses"]
        stats["hit_rate"] = stats["cache_hits"] / lookups if lookups else 0.0
        return stats
