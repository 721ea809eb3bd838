"""Spoonacular HTTP client.

Performs single provider calls through a shared ``requests.Session``. Each
call is admitted by the process-wide RequestThrottle and carries a
deadline. The client does not retry and does not cache; both are left to
the caller.

Two authentication modes are supported:

- gateway mode (RapidAPI): ``https://<host>`` with the ``X-RapidAPI-Key``
  and ``X-RapidAPI-Host`` headers
- direct mode: ``https://api.spoonacular.com`` with the ``apiKey`` query
  parameter

Gateway mode wins when a RapidAPI key is configured.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Literal

import requests
from requests.adapters import HTTPAdapter

from kitchensync.config.models import SpoonacularSettings
from kitchensync.services.lookups.base import ProviderRequest
from kitchensync.services.request_throttle import RequestThrottle
from kitchensync.shared.constants import HTTPStatusCodes, NetworkConfig, SpoonacularConfig
from kitchensync.shared.errors import (
    ErrorCode,
    ErrorContext,
    NormalizationError,
    ProviderError,
    TransportError,
    create_config_error,
)
from kitchensync.shared.logging import log_api_call

logger = logging.getLogger(__name__)

AuthType = Literal["rapidapi", "direct"]


@dataclass(frozen=True)
class SpoonacularAuth:
    """Resolved base URL and credentials for provider calls."""

    base_url: str
    auth_type: AuthType
    headers: dict[str, str] = field(default_factory=dict, repr=False)
    params: dict[str, str] = field(default_factory=dict, repr=False)


def resolve_auth(settings: SpoonacularSettings) -> SpoonacularAuth:
    """Pick gateway or direct mode from the configured credentials.

    Raises:
        ConfigurationError: If neither a RapidAPI key nor an API key is set
    """
    if not settings.has_credentials:
        raise create_config_error(
            "Spoonacular API key missing",
            setting="api.spoonacular.api_key",
        )

    rapidapi_key = settings.rapidapi_key.strip()
    if rapidapi_key:
        host = settings.rapidapi_host.strip()
        return SpoonacularAuth(
            base_url=f"https://{host}",
            auth_type="rapidapi",
            headers={
                SpoonacularConfig.RAPIDAPI_KEY_HEADER: rapidapi_key,
                SpoonacularConfig.RAPIDAPI_HOST_HEADER: host,
            },
        )

    return SpoonacularAuth(
        base_url=settings.base_url.rstrip("/"),
        auth_type="direct",
        params={SpoonacularConfig.API_KEY_PARAM: settings.api_key.strip()},
    )


class SpoonacularClient:
    """Throttled Spoonacular API client.

    Args:
        settings: Provider settings (credentials, base URL, timeout)
        throttle: Process-wide admission controller shared by every call
        session: Optional pre-built session (tests inject a mock here)

    Raises:
        ConfigurationError: If no credentials are configured
    """

    def __init__(
        self,
        settings: SpoonacularSettings,
        throttle: RequestThrottle,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings
        self.throttle = throttle
        self.auth = resolve_auth(settings)
        self.timeout = settings.timeout_seconds
        self.session = session or self._create_session()
        self._stats_lock = threading.Lock()
        self._request_count = 0
        self._error_count = 0

        logger.info(
            "Spoonacular client initialized in %s mode (base URL %s)",
            self.auth.auth_type,
            self.auth.base_url,
        )

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=NetworkConfig.POOL_CONNECTIONS,
            pool_maxsize=NetworkConfig.POOL_MAXSIZE,
        )
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers["User-Agent"] = NetworkConfig.USER_AGENT
        session.headers["Accept"] = NetworkConfig.ACCEPT_JSON
        return session

    def build_url(self, path: str) -> str:
        return f"{self.auth.base_url}{path}"

    def fetch(self, request: ProviderRequest) -> Any:
        """Perform one throttled provider call.

        Args:
            request: Provider path, query parameters and optional JSON body

        Returns:
            The decoded JSON body of a success response

        Raises:
            ProviderError: Non-success HTTP status (body attached)
            TransportError: Connection failure or timeout
            NormalizationError: Success response whose body is not JSON
            ThrottleShutdownError: The throttle was shut down while waiting
        """
        url = self.build_url(request.path)
        params = {**request.params, **self.auth.params}
        context = ErrorContext(
            operation="provider_fetch",
            additional_data={"endpoint": request.path, "method": request.method},
        )

        with self.throttle:
            start_time = time.perf_counter()
            try:
                response = self.session.request(
                    request.method,
                    url,
                    params=params,
                    json=request.json_body,
                    headers=self.auth.headers,
                    timeout=self.timeout,
                )
            except requests.Timeout as e:
                self._bump(error=True)
                raise TransportError(
                    ErrorCode.API_TIMEOUT,
                    f"Provider call timed out after {self.timeout}s",
                    context,
                    original_error=e,
                ) from e
            except requests.RequestException as e:
                self._bump(error=True)
                raise TransportError(
                    ErrorCode.NETWORK_ERROR,
                    f"Provider call failed: {e!s}",
                    context,
                    original_error=e,
                ) from e
            finally:
                self._bump()
            duration_ms = (time.perf_counter() - start_time) * 1000

        log_api_call(
            logger,
            request.path,
            method=request.method,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        if not HTTPStatusCodes.is_success(response.status_code):
            self._bump(error=True)
            raise ProviderError(
                response.status_code,
                f"Spoonacular error (HTTP {response.status_code})",
                body=self._response_body(response),
                context=context,
            )

        try:
            return response.json()
        except ValueError as e:
            raise NormalizationError(
                "Provider returned a non-JSON success response",
                context,
                original_error=e,
            ) from e

    @staticmethod
    def _response_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _bump(self, *, error: bool = False) -> None:
        with self._stats_lock:
            if error:
                self._error_count += 1
            else:
                self._request_count += 1

    def get_stats(self) -> dict[str, Any]:
        with self._stats_lock:
            request_count = self._request_count
            error_count = self._error_count
        return {
            "auth_type": self.auth.auth_type,
            "base_url": self.auth.base_url,
            "request_count": request_count,
            "error_count": error_count,
            "throttle": self.throttle.get_stats(),
        }

    def close(self) -> None:
        self.session.close()
