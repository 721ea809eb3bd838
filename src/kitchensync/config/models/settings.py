"""KitchenSync Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kitchensync.config.models.api_settings import APISettings
from kitchensync.config.models.app_settings import LoggingSettings
from kitchensync.config.models.cache_settings import CacheSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Unified configuration access.

    Environment variables use the ``KITCHENSYNC_`` prefix and ``__`` as the
    nesting delimiter, e.g. ``KITCHENSYNC_API__SPOONACULAR__API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_prefix="KITCHENSYNC_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file; its values take precedence over the environment."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)
