"""Services module for KitchenSync.

This module contains the request throttle, the cache stores, the provider
client and the read-through lookup behind the broker facade.
"""

from .broker import FoodDataBroker, build_cache_store
from .cache_models import CacheEntry
from .memory_cache import MemoryCacheStore
from .read_through import ReadThroughLookup
from .request_throttle import RequestThrottle
from .spoonacular import SpoonacularClient
from .sqlite_cache import SQLiteCacheDB

__all__ = [
    "CacheEntry",
    "FoodDataBroker",
    "MemoryCacheStore",
    "ReadThroughLookup",
    "RequestThrottle",
    "SQLiteCacheDB",
    "SpoonacularClient",
    "build_cache_store",
]
