"""Ingredient search and ingredient detail lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kitchensync.services.lookups.base import LookupStrategy, ProviderRequest, clamp
from kitchensync.services.lookups.filters import normalize_intolerance_filters
from kitchensync.services.lookups.images import ingredient_image
from kitchensync.services.lookups.models import (
    IngredientInfo,
    IngredientInfoResponse,
    IngredientSearchResponse,
    IngredientSearchResult,
)
from kitchensync.shared.cache_utils import canonical_text
from kitchensync.shared.constants import CacheNamespace, SpoonacularConfig
from kitchensync.shared.errors import create_validation_error
from kitchensync.shared.utils.payload import (
    as_list,
    as_mapping,
    optional_int,
    optional_str,
    require_int,
    require_text,
    string_list,
)


@dataclass(frozen=True)
class IngredientSearchParams:
    query: str
    limit: int = SpoonacularConfig.DEFAULT_RESULT_COUNT
    offset: int = 0
    intolerances: tuple[str, ...] = ()


@dataclass(frozen=True)
class IngredientInfoParams:
    ingredient_id: int
    amount: float = 1
    unit: str | None = None


class IngredientSearchLookup(LookupStrategy[IngredientSearchParams, IngredientSearchResponse]):
    """Free-text ingredient search, optionally excluding intolerances."""

    namespace = CacheNamespace.INGREDIENTS
    operation = "search_ingredients"
    item_model = IngredientSearchResult
    response_model = IngredientSearchResponse

    def validate(self, params: IngredientSearchParams) -> None:
        if not canonical_text(params.query):
            raise create_validation_error(
                "Ingredient search query must not be empty",
                field="query",
                operation=self.operation,
            )

    def key_fields(self, params: IngredientSearchParams) -> dict[str, Any]:
        return {
            "query": canonical_text(params.query),
            "limit": clamp(params.limit, 1, SpoonacularConfig.INGREDIENT_SEARCH_MAX),
            "offset": max(0, params.offset),
            "intolerances": normalize_intolerance_filters(params.intolerances),
        }

    def build_request(self, params: IngredientSearchParams) -> ProviderRequest:
        fields = self.key_fields(params)
        query_params = {
            "query": fields["query"],
            "number": str(fields["limit"]),
            "offset": str(fields["offset"]),
            "addChildren": "true",
        }
        if fields["intolerances"]:
            query_params["intolerances"] = ",".join(fields["intolerances"])
        return ProviderRequest(
            path=SpoonacularConfig.INGREDIENT_SEARCH_ENDPOINT,
            params=query_params,
        )

    def normalize(
        self,
        raw: Any,
        params: IngredientSearchParams,
        cache_key: str,
    ) -> IngredientSearchResponse:
        payload = as_mapping(raw)
        results = []
        for row in as_list(payload.get("results")):
            item = as_mapping(row)
            results.append(
                IngredientSearchResult(
                    id=require_int(item, "id", "ingredient"),
                    name=require_text(item, "name", "ingredient"),
                    image=ingredient_image(item.get("image")),
                    aisle=optional_str(item.get("aisle")),
                )
            )

        total = optional_int(payload.get("totalResults"))
        return IngredientSearchResponse(
            results=results,
            total_results=total if total is not None else len(results),
            cached=False,
            cache_key=cache_key,
            applied_intolerances=normalize_intolerance_filters(params.intolerances),
        )

    def rehydrate(
        self,
        payload: Any,
        params: IngredientSearchParams,
        cache_key: str,
    ) -> IngredientSearchResponse:
        response = super().rehydrate(payload, params, cache_key)
        if not response.applied_intolerances:
            response.applied_intolerances = normalize_intolerance_filters(params.intolerances)
        return response


def canonical_amount(amount: float) -> str:
    """Exact text form of an amount: ``"150"`` for whole numbers, else ``repr``."""
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class IngredientInfoLookup(LookupStrategy[IngredientInfoParams, IngredientInfoResponse]):
    """Ingredient detail: aisle, possible units and nutrition for an amount."""

    namespace = CacheNamespace.INGREDIENT_INFO
    operation = "get_ingredient_info"
    item_model = IngredientInfo
    response_model = IngredientInfoResponse

    def validate(self, params: IngredientInfoParams) -> None:
        if params.ingredient_id <= 0:
            raise create_validation_error(
                f"Invalid ingredient id: {params.ingredient_id}",
                field="ingredient_id",
                operation=self.operation,
            )
        if params.amount <= 0:
            raise create_validation_error(
                f"Amount must be positive, got: {params.amount}",
                field="amount",
                operation=self.operation,
            )

    def key_fields(self, params: IngredientInfoParams) -> dict[str, Any]:
        return {
            "id": params.ingredient_id,
            "amount": canonical_amount(params.amount),
            "unit": canonical_text(params.unit) or None,
        }

    def build_request(self, params: IngredientInfoParams) -> ProviderRequest:
        fields = self.key_fields(params)
        query_params = {"amount": fields["amount"]}
        if fields["unit"]:
            query_params["unit"] = fields["unit"]
        return ProviderRequest(
            path=SpoonacularConfig.INGREDIENT_INFO_ENDPOINT.format(
                ingredient_id=params.ingredient_id,
            ),
            params=query_params,
        )

    def normalize(
        self,
        raw: Any,
        params: IngredientInfoParams,
        cache_key: str,
    ) -> IngredientInfoResponse:
        payload = as_mapping(raw)
        nutrition = as_mapping(payload.get("nutrition"))
        info = IngredientInfo(
            id=require_int(payload, "id", "ingredient"),
            name=require_text(payload, "name", "ingredient"),
            aisle=optional_str(payload.get("aisle")),
            image=ingredient_image(payload.get("image")),
            possible_units=string_list(payload.get("possibleUnits")),
            nutrition=nutrition or None,
        )
        return IngredientInfoResponse(
            results=[info],
            total_results=1,
            cached=False,
            cache_key=cache_key,
        )
