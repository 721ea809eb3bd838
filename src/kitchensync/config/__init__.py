"""KitchenSync Configuration Module

Unified access to configuration models and settings management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config, reset_config
- Domain models: API, Cache and Logging settings
"""

from __future__ import annotations

from .models import (
    APISettings,
    CacheSettings,
    LoggingSettings,
    Settings,
    SpoonacularSettings,
)
from .loader import get_config, load_settings, reload_config, reset_config

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "SpoonacularSettings",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
