"""
Pytest configuration and shared fixtures for KitchenSync tests.

Every test runs in an empty working directory with the provider and
KitchenSync environment variables removed, so no developer .env file,
TOML file or cache database leaks into a test.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
import requests

from kitchensync.config import Settings, reset_config
from kitchensync.config.loader import PROVIDER_ENV_VARS
from kitchensync.lookups import shutdown_broker
from kitchensync.services.memory_cache import MemoryCacheStore
from kitchensync.services.request_throttle import RequestThrottle
from kitchensync.services.spoonacular import SpoonacularClient
from kitchensync.services.sqlite_cache import SQLiteCacheDB

TEST_API_KEY = "test_api_key_for_ci_testing_only"  # pragma: allowlist secret


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[Path, None, None]:
    """Run each test in a clean working directory and environment."""
    provider_variables = {name for names in PROVIDER_ENV_VARS.values() for name in names}
    for variable in list(os.environ):
        if variable.startswith("KITCHENSYNC_") or variable in provider_variables:
            monkeypatch.delenv(variable, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()

    yield tmp_path

    shutdown_broker()
    reset_config()


class FakeClock:
    """Settable UTC clock for freshness tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Direct-mode settings with an unthrottled interval and memory cache."""
    return Settings(
        api={
            "spoonacular": {
                "api_key": TEST_API_KEY,
                "max_concurrent_requests": 2,
                "min_interval_millis": 0,
            },
        },
        cache={"backend": "memory"},
    )


@pytest.fixture
def throttle() -> Generator[RequestThrottle, None, None]:
    throttle = RequestThrottle(max_concurrent_requests=2, min_interval_millis=0)
    yield throttle
    throttle.shutdown()


@pytest.fixture
def memory_store(clock: FakeClock) -> Generator[MemoryCacheStore, None, None]:
    store = MemoryCacheStore(clock=clock)
    yield store
    store.close()


@pytest.fixture
def sqlite_store(tmp_path: Path, clock: FakeClock) -> Generator[SQLiteCacheDB, None, None]:
    store = SQLiteCacheDB(tmp_path / "cache" / "recipe_cache.db", clock=clock)
    yield store
    store.close()


@pytest.fixture
def make_response(mocker) -> Callable[..., Any]:
    """Build a mocked requests.Response.

    ``payload`` is returned by ``.json()``; pass ``text`` without a payload
    for a non-JSON body.
    """

    def _make(status_code: int = 200, payload: Any = None, text: str = "") -> Any:
        response = mocker.Mock(spec=requests.Response)
        response.status_code = status_code
        if payload is None and text:
            response.json.side_effect = requests.JSONDecodeError("Expecting value", text, 0)
            response.text = text
        else:
            response.json.return_value = payload
            response.text = text
        return response

    return _make


@pytest.fixture
def fake_session(mocker) -> Any:
    """Mocked requests.Session; set ``request.return_value`` per test."""
    return mocker.Mock(spec=requests.Session)


@pytest.fixture
def client(settings: Settings, throttle: RequestThrottle, fake_session: Any) -> SpoonacularClient:
    return SpoonacularClient(settings.api.spoonacular, throttle, session=fake_session)
