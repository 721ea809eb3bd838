"""Grocery product lookups: search, detail by id and detail by UPC."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from kitchensync.services.lookups.base import LookupStrategy, ProviderRequest, clamp
from kitchensync.services.lookups.images import product_image
from kitchensync.services.lookups.models import (
    GroceryProduct,
    GroceryProductResponse,
    GrocerySearchResponse,
    GrocerySearchResult,
)
from kitchensync.shared.cache_utils import canonical_text
from kitchensync.shared.constants import CacheNamespace, SpoonacularConfig
from kitchensync.shared.errors import create_validation_error
from kitchensync.shared.utils.payload import (
    as_list,
    as_mapping,
    optional_int,
    optional_number,
    optional_str,
    require_int,
    require_text,
    string_list,
)


@dataclass(frozen=True)
class GrocerySearchParams:
    query: str
    number: int = SpoonacularConfig.DEFAULT_RESULT_COUNT


@dataclass(frozen=True)
class GroceryProductParams:
    product_id: int


@dataclass(frozen=True)
class GroceryUpcParams:
    upc: str


def _upc_text(value: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return optional_str(value)


def normalize_product(raw: Any, upc: str | None = None) -> GroceryProduct:
    """Project a provider product detail payload.

    Raises:
        NormalizationError: If the product has no id or title
    """
    payload = as_mapping(raw)
    product_id = require_int(payload, "id", "product")
    image = optional_str(payload.get("image"))
    if image is None or not image.startswith("http"):
        image = product_image(product_id, payload.get("imageType") or image)

    nutrition = as_mapping(payload.get("nutrition"))
    servings = as_mapping(payload.get("servings"))
    return GroceryProduct(
        id=product_id,
        title=require_text(payload, "title", "product"),
        image=image,
        badges=string_list(payload.get("badges")),
        nutrition=nutrition or None,
        ingredient_list=optional_str(payload.get("ingredientList")),
        upc=_upc_text(payload.get("upc")) or upc,
        servings=servings or None,
        price=optional_number(payload.get("price")),
        aisle=optional_str(payload.get("aisle")),
        brand=optional_str(payload.get("brand")),
    )


class GrocerySearchLookup(LookupStrategy[GrocerySearchParams, GrocerySearchResponse]):
    """Packaged grocery product search."""

    namespace = CacheNamespace.GROCERIES
    operation = "search_groceries"
    item_model = GrocerySearchResult
    response_model = GrocerySearchResponse

    def validate(self, params: GrocerySearchParams) -> None:
        if not canonical_text(params.query):
            raise create_validation_error(
                "Grocery search query must not be empty",
                field="query",
                operation=self.operation,
            )

    def key_fields(self, params: GrocerySearchParams) -> dict[str, Any]:
        return {
            "query": canonical_text(params.query),
            "number": clamp(params.number, 1, SpoonacularConfig.PRODUCT_SEARCH_MAX),
        }

    def build_request(self, params: GrocerySearchParams) -> ProviderRequest:
        fields = self.key_fields(params)
        return ProviderRequest(
            path=SpoonacularConfig.PRODUCT_SEARCH_ENDPOINT,
            params={"query": fields["query"], "number": str(fields["number"])},
        )

    def normalize(
        self,
        raw: Any,
        params: GrocerySearchParams,
        cache_key: str,
    ) -> GrocerySearchResponse:
        payload = as_mapping(raw)
        results = []
        for row in as_list(payload.get("products")):
            item = as_mapping(row)
            product_id = require_int(item, "id", "product")
            results.append(
                GrocerySearchResult(
                    id=product_id,
                    title=require_text(item, "title", "product"),
                    image=product_image(product_id, item.get("imageType")),
                )
            )

        total = optional_int(payload.get("totalProducts"))
        return GrocerySearchResponse(
            results=results,
            total_results=total if total is not None else len(results),
            cached=False,
            cache_key=cache_key,
        )


class GroceryProductLookup(LookupStrategy[GroceryProductParams, GroceryProductResponse]):
    """Grocery product detail by provider id."""

    namespace = CacheNamespace.GROCERY_PRODUCT
    operation = "get_grocery_product"
    item_model = GroceryProduct
    response_model = GroceryProductResponse

    def validate(self, params: GroceryProductParams) -> None:
        if params.product_id <= 0:
            raise create_validation_error(
                f"Invalid product id: {params.product_id}",
                field="product_id",
                operation=self.operation,
            )

    def key_fields(self, params: GroceryProductParams) -> dict[str, Any]:
        return {"id": params.product_id}

    def build_request(self, params: GroceryProductParams) -> ProviderRequest:
        return ProviderRequest(
            path=SpoonacularConfig.PRODUCT_DETAIL_ENDPOINT.format(product_id=params.product_id),
        )

    def normalize(
        self,
        raw: Any,
        params: GroceryProductParams,
        cache_key: str,
    ) -> GroceryProductResponse:
        return GroceryProductResponse(
            results=[normalize_product(raw)],
            total_results=1,
            cached=False,
            cache_key=cache_key,
        )


class GroceryUpcLookup(LookupStrategy[GroceryUpcParams, GroceryProductResponse]):
    """Grocery product detail by barcode."""

    namespace = CacheNamespace.GROCERY_UPC
    operation = "get_grocery_product_by_upc"
    item_model = GroceryProduct
    response_model = GroceryProductResponse

    def validate(self, params: GroceryUpcParams) -> None:
        upc = params.upc.strip()
        if not upc or not upc.isdigit():
            raise create_validation_error(
                f"UPC must be a non-empty string of digits, got: {params.upc!r}",
                field="upc",
                operation=self.operation,
            )

    def key_fields(self, params: GroceryUpcParams) -> dict[str, Any]:
        return {"upc": params.upc.strip()}

    def build_request(self, params: GroceryUpcParams) -> ProviderRequest:
        return ProviderRequest(
            path=SpoonacularConfig.PRODUCT_UPC_ENDPOINT.format(upc=quote(params.upc.strip(), safe="")),
        )

    def normalize(
        self,
        raw: Any,
        params: GroceryUpcParams,
        cache_key: str,
    ) -> GroceryProductResponse:
        return GroceryProductResponse(
            results=[normalize_product(raw, upc=params.upc.strip())],
            total_results=1,
            cached=False,
            cache_key=cache_key,
        )
