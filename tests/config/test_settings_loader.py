"""
Tests for settings models and the settings loader.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kitchensync.config import (
    CacheSettings,
    LoggingSettings,
    Settings,
    SpoonacularSettings,
    get_config,
    load_settings,
    reload_config,
    reset_config,
)
from kitchensync.config.loader import provider_env_overrides
from kitchensync.shared.errors import ConfigurationError


class TestSettingsModels:
    """Test defaults and validation of the settings models."""

    def test_defaults(self):
        settings = Settings()

        spoonacular = settings.api.spoonacular
        assert spoonacular.api_key == ""
        assert spoonacular.has_credentials is False
        assert spoonacular.base_url == "https://api.spoonacular.com"
        assert spoonacular.max_concurrent_requests == 2
        assert spoonacular.min_interval_millis == 1000
        assert settings.cache.backend == "sqlite"
        assert settings.cache.ttl_seconds == 12 * 3600
        assert settings.logging.level == "INFO"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_concurrent_requests": 0},
            {"min_interval_millis": -1},
            {"timeout_seconds": 0},
        ],
    )
    def test_invalid_provider_limits(self, kwargs):
        with pytest.raises(ValidationError):
            SpoonacularSettings(**kwargs)

    def test_invalid_cache_backend(self):
        with pytest.raises(ValidationError):
            CacheSettings(backend="redis")

    def test_logging_level_normalized(self):
        assert LoggingSettings(level=" debug ").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingSettings(level="chatty")

    def test_from_toml_file(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('[cache]\nbackend = "memory"\nttl_seconds = 60\n', encoding="utf-8")

        loaded = Settings.from_toml_file(path)

        assert loaded.cache.backend == "memory"
        assert loaded.cache.ttl_seconds == 60


class TestEnvironmentLoading:
    """Test environment variable sources and their precedence."""

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("KITCHENSYNC_API__SPOONACULAR__API_KEY", "prefixed-key")
        monkeypatch.setenv("KITCHENSYNC_CACHE__TTL_SECONDS", "120")

        settings = load_settings()

        assert settings.api.spoonacular.api_key == "prefixed-key"
        assert settings.cache.ttl_seconds == 120

    def test_conventional_provider_variables(self, monkeypatch):
        monkeypatch.setenv("SPOONACULAR_API_KEY", "direct-key")
        monkeypatch.setenv("RAPIDAPI_KEY", "rapid-key")
        monkeypatch.setenv("SPOONACULAR_RAPIDAPI_HOST", "gw.example")
        monkeypatch.setenv("SPOONACULAR_CONCURRENCY", "4")
        monkeypatch.setenv("SPOONACULAR_MIN_INTERVAL_MS", "250")

        spoonacular = load_settings().api.spoonacular

        assert spoonacular.api_key == "direct-key"
        assert spoonacular.rapidapi_key == "rapid-key"
        assert spoonacular.rapidapi_host == "gw.example"
        assert spoonacular.max_concurrent_requests == 4
        assert spoonacular.min_interval_millis == 250

    def test_prefixed_variable_wins_over_conventional(self, monkeypatch):
        monkeypatch.setenv("KITCHENSYNC_API__SPOONACULAR__API_KEY", "prefixed-key")
        monkeypatch.setenv("SPOONACULAR_API_KEY", "direct-key")

        assert load_settings().api.spoonacular.api_key == "prefixed-key"

    def test_first_rapidapi_variable_wins(self):
        overrides = provider_env_overrides(
            {
                "SPOONACULAR_RAPIDAPI_KEY": "",
                "RAPIDAPI_SPOONACULAR_KEY": "second",
                "RAPIDAPI_KEY": "third",
            },
        )

        assert overrides == {"rapidapi_key": "second"}

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # Restore the process environment after load_dotenv writes to it
        monkeypatch.setenv("SPOONACULAR_API_KEY", "placeholder")
        monkeypatch.delenv("SPOONACULAR_API_KEY")
        (tmp_path / ".env").write_text("SPOONACULAR_API_KEY=from-dotenv\n", encoding="utf-8")

        assert load_settings().api.spoonacular.api_key == "from-dotenv"

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("SPOONACULAR_CONCURRENCY", "0")

        with pytest.raises(ConfigurationError):
            load_settings()


class TestConfigFiles:
    """Test TOML file discovery and errors."""

    def test_default_file_location(self, tmp_path):
        (tmp_path / "kitchensync.toml").write_text(
            '[api.spoonacular]\napi_key = "file-key"\n\n[cache]\nbackend = "memory"\n',
            encoding="utf-8",
        )

        settings = load_settings()

        assert settings.api.spoonacular.api_key == "file-key"
        assert settings.cache.backend == "memory"

    def test_file_wins_over_conventional_variables(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPOONACULAR_API_KEY", "env-key")
        path = tmp_path / "custom.toml"
        path.write_text('[api.spoonacular]\napi_key = "file-key"\n', encoding="utf-8")

        assert load_settings(path).api.spoonacular.api_key == "file-key"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "missing.toml")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[cache\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Malformed"):
            load_settings(path)


class TestSettingsSingleton:
    """Test the cached settings instance."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_and_reload(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("SPOONACULAR_API_KEY", "later-key")

        assert get_config() is first
        reset_config()
        assert get_config().api.spoonacular.api_key == "later-key"
        assert reload_config() is get_config()
