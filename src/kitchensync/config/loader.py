"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from an optional .env file
- The provider's conventional SPOONACULAR_* / RAPIDAPI_* variables
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from kitchensync.config.models.api_settings import SpoonacularSettings
from kitchensync.config.models.settings import Settings
from kitchensync.shared.errors import create_config_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = (
    Path("config/config.toml"),
    Path("kitchensync.toml"),
)

# Provider variables, first non-empty wins per setting
PROVIDER_ENV_VARS: dict[str, tuple[str, ...]] = {
    "rapidapi_key": (
        "SPOONACULAR_RAPIDAPI_KEY",
        "RAPIDAPI_SPOONACULAR_KEY",
        "RAPIDAPI_KEY",
    ),
    "rapidapi_host": ("SPOONACULAR_RAPIDAPI_HOST",),
    "api_key": ("SPOONACULAR_API_KEY",),
    "max_concurrent_requests": ("SPOONACULAR_CONCURRENCY",),
    "min_interval_millis": ("SPOONACULAR_MIN_INTERVAL_MS",),
}


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking to ensure thread-safety while minimizing
    lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from the environment and files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        with self._lock:
            self._instance = None


def _load_env_file(env_file: Path | None = None) -> None:
    """Load variables from a .env file if one exists.

    Variables already present in the process environment are kept.
    """
    env_file = env_file or Path(".env")
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment file: %s", env_file)


def provider_env_overrides(environ: dict[str, str] | None = None) -> dict[str, str]:
    """Collect provider settings from the conventional Spoonacular variables."""
    environ = dict(os.environ) if environ is None else environ
    overrides: dict[str, str] = {}
    for field_name, variables in PROVIDER_ENV_VARS.items():
        for variable in variables:
            value = (environ.get(variable) or "").strip()
            if value:
                overrides[field_name] = value
                break
    return overrides


def _apply_provider_overrides(settings: Settings, overrides: dict[str, Any]) -> Settings:
    """Fill provider settings not set explicitly from the conventional variables."""
    spoonacular = settings.api.spoonacular
    fallbacks = {
        name: value
        for name, value in overrides.items()
        if name not in spoonacular.model_fields_set
    }
    if not fallbacks:
        return settings

    merged = spoonacular.model_dump()
    merged.update(fallbacks)
    settings.api.spoonacular = SpoonacularSettings(**merged)
    return settings


def load_settings(
    config_path: str | Path | None = None,
    env_file: Path | None = None,
) -> Settings:
    """Load settings from a TOML file or the environment.

    Precedence, highest first: TOML file, ``KITCHENSYNC_*`` variables,
    conventional ``SPOONACULAR_*`` variables, defaults.

    Args:
        config_path: Optional TOML configuration file. If None, the default
            locations are tried before falling back to the environment.
        env_file: Optional .env file (default: ./.env)

    Raises:
        ConfigurationError: If the configuration is invalid or the given
            file does not exist
    """
    _load_env_file(env_file)

    try:
        if config_path:
            settings = Settings.from_toml_file(config_path)
        else:
            existing = next((path for path in DEFAULT_CONFIG_PATHS if path.exists()), None)
            settings = Settings.from_toml_file(existing) if existing else Settings()

        return _apply_provider_overrides(settings, provider_env_overrides())

    except FileNotFoundError as e:
        raise create_config_error(
            str(e),
            setting="config_path",
            original_error=e,
        ) from e
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Malformed configuration file: {e}",
            setting="config_path",
            original_error=e,
        ) from e
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            original_error=e,
        ) from e


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance."""
    return _loader.reload_config(config_path)


def reset_config() -> None:
    """Drop the cached settings instance so the next access reloads it."""
    _loader.reset()
