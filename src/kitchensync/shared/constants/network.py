"""
Network Configuration Constants

This module contains constants for the provider HTTP client and the
process-wide request throttle.
"""

from .system import BASE_SECOND


class NetworkConfig:
    """Network configuration constants."""

    # Timeout settings
    DEFAULT_REQUEST_TIMEOUT = 15 * BASE_SECOND

    # Throttle settings (Spoonacular free tier friendly)
    DEFAULT_MAX_CONCURRENT_REQUESTS = 2
    DEFAULT_MIN_INTERVAL_MILLIS = 1000

    # Connection pool
    POOL_CONNECTIONS = 4
    POOL_MAXSIZE = 8

    # User agent
    USER_AGENT = "KitchenSync/0.1.0"

    # HTTP headers
    ACCEPT_JSON = "application/json"
