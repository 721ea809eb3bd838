"""API configuration models.

Credentials, endpoints and throttle limits of the Spoonacular provider.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from kitchensync.shared.constants import NetworkConfig, SpoonacularConfig


class SpoonacularSettings(BaseModel):
    """Spoonacular API configuration.

    Either ``rapidapi_key`` (gateway mode) or ``api_key`` (direct mode) must
    be set before a provider client is built; gateway mode wins when both
    are present.

    Security: both keys are masked in __repr__.
    """

    api_key: str = Field(
        default="",
        repr=False,
        description="Direct Spoonacular API key (sent as the apiKey query parameter)",
    )
    rapidapi_key: str = Field(
        default="",
        repr=False,
        description="RapidAPI key for the Spoonacular gateway",
    )
    rapidapi_host: str = Field(
        default=SpoonacularConfig.DEFAULT_RAPIDAPI_HOST,
        min_length=1,
        description="RapidAPI host of the Spoonacular gateway",
    )
    base_url: str = Field(
        default=SpoonacularConfig.DIRECT_BASE_URL,
        min_length=1,
        description="Base URL used in direct mode",
    )

    timeout_seconds: float = Field(
        default=NetworkConfig.DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        description="Per-call deadline in seconds",
    )

    max_concurrent_requests: int = Field(
        default=NetworkConfig.DEFAULT_MAX_CONCURRENT_REQUESTS,
        ge=1,
        description="Maximum number of in-flight provider calls",
    )
    min_interval_millis: int = Field(
        default=NetworkConfig.DEFAULT_MIN_INTERVAL_MILLIS,
        ge=0,
        description="Minimum spacing between provider call starts in milliseconds",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.rapidapi_key.strip() or self.api_key.strip())

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        masked_rapidapi_key = "****" if self.rapidapi_key else "[empty]"
        return (
            f"SpoonacularSettings("
            f"api_key={masked_key}, "
            f"rapidapi_key={masked_rapidapi_key}, "
            f"rapidapi_host={self.rapidapi_host}, "
            f"timeout_seconds={self.timeout_seconds}, "
            f"max_concurrent_requests={self.max_concurrent_requests}, "
            f"min_interval_millis={self.min_interval_millis})"
        )

    __str__ = __repr__


class APISettings(BaseModel):
    """API configuration container."""

    spoonacular: SpoonacularSettings = Field(
        default_factory=SpoonacularSettings,
        description="Spoonacular API configuration",
    )


__all__ = [
    "APISettings",
    "SpoonacularSettings",
]
