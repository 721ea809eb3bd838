"""
KitchenSync Constants Module

Centralized constants for the provider client, the request throttle and
the response cache.
"""

from .api import SpoonacularConfig
from .cache import CacheConfig, CacheNamespace
from .http_codes import HTTPStatusCodes
from .network import NetworkConfig
from .system import BASE_DAY, BASE_HOUR, BASE_MILLISECOND, BASE_MINUTE, BASE_SECOND

__all__ = [
    "BASE_DAY",
    "BASE_HOUR",
    "BASE_MILLISECOND",
    "BASE_MINUTE",
    "BASE_SECOND",
    "CacheConfig",
    "CacheNamespace",
    "HTTPStatusCodes",
    "NetworkConfig",
    "SpoonacularConfig",
]
