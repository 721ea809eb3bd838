"""Lookup Strategy Pattern Implementation.

Each lookup domain (ingredient search, grocery product detail, recipe
search, ...) is a strategy that knows how to:

- validate its parameters
- name the fields that identify a request (its cache key)
- build the provider request
- normalize a raw provider payload into its result model
- re-hydrate a cached payload into the same model

The read-through orchestration in ``kitchensync.services.read_through`` is
shared by all strategies and knows nothing about any domain.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from kitchensync.services.lookups.models import LookupResponse, ResultModel
from kitchensync.shared.cache_utils import derive_cache_key
from kitchensync.shared.errors import ErrorContext, NormalizationError
from kitchensync.shared.utils.payload import as_list, optional_int

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT")
ResponseT = TypeVar("ResponseT", bound=LookupResponse[Any])


@dataclass(frozen=True)
class ProviderRequest:
    """One outbound provider call, relative to the provider base URL."""

    path: str
    params: dict[str, str] = field(default_factory=dict)
    method: str = "GET"
    json_body: Any = None


def clamp(value: int, minimum: int, maximum: int) -> int:
    return min(max(value, minimum), maximum)


class LookupStrategy(ABC, Generic[ParamsT, ResponseT]):
    """Abstract base class for lookup domains.

    Subclasses must set ``namespace``, ``operation``, ``item_model`` and
    ``response_model`` and implement ``key_fields``, ``build_request`` and
    ``normalize``.
    """

    namespace: ClassVar[str]
    operation: ClassVar[str]
    item_model: ClassVar[type[ResultModel]]
    response_model: ClassVar[type[LookupResponse[Any]]]

    def validate(self, params: ParamsT) -> None:  # noqa: B027
        """Reject invalid parameters before any cache or network access."""

    @abstractmethod
    def key_fields(self, params: ParamsT) -> dict[str, Any]:
        """Canonical identifying fields of a request, in a fixed order."""

    def cache_key(self, params: ParamsT) -> str:
        return derive_cache_key(self.namespace, self.key_fields(params))

    @abstractmethod
    def build_request(self, params: ParamsT) -> ProviderRequest:
        """Provider request answering params."""

    @abstractmethod
    def normalize(self, raw: Any, params: ParamsT, cache_key: str) -> ResponseT:
        """Project a raw provider payload into the result model.

        Raises:
            NormalizationError: If a required identifying field is missing
        """

    def ttl_seconds(self, params: ParamsT) -> int | None:
        """Lifetime of a cached answer; None means the store default."""
        return None

    def to_cache_payload(self, response: ResponseT) -> dict[str, Any]:
        """Stored form of a response, without the per-call ``cached`` flag."""
        payload = response.to_payload()
        payload.pop("cached", None)
        return payload

    def rehydrate(self, payload: Any, params: ParamsT, cache_key: str) -> ResponseT:
        """Rebuild a response from a cached payload and tag it ``cached=True``.

        Fields missing from older cache formats take their defaults and
        result rows that no longer validate are dropped.

        Raises:
            NormalizationError: If the payload is not a lookup envelope
        """
        if not isinstance(payload, Mapping):
            raise NormalizationError(
                "Cached payload is not an object",
                ErrorContext(
                    operation="rehydrate",
                    additional_data={"cache_key": cache_key},
                ),
            )

        data = dict(payload)
        items: list[ResultModel] = []
        for row in as_list(data.get("results")):
            try:
                items.append(self.item_model.model_validate(row))
            except ValidationError:
                logger.debug("Dropping invalid cached row under %s", cache_key)

        total = optional_int(data.get("totalResults"))
        data["results"] = items
        data["totalResults"] = total if total is not None else len(items)
        data["cached"] = True
        data["cacheKey"] = data.get("cacheKey") or cache_key

        try:
            return self.response_model.model_validate(data)  # type: ignore[return-value]
        except ValidationError as e:
            raise NormalizationError(
                f"Cached payload does not match {self.response_model.__name__}",
                ErrorContext(
                    operation="rehydrate",
                    additional_data={"cache_key": cache_key},
                ),
                original_error=e,
            ) from e
