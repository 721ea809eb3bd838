"""KitchenSync Shared Module.

This package contains shared utilities, constants and error handling used across KitchenSync.
"""

__all__ = ["cache_utils", "errors", "logging"]
