"""Ingredient-to-product mapping lookup.

Maps free-text ingredient lines ("2 cups milk") to purchasable grocery
products.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kitchensync.services.lookups.base import LookupStrategy, ProviderRequest
from kitchensync.services.lookups.images import ingredient_image
from kitchensync.services.lookups.models import (
    IngredientMapResponse,
    IngredientProductMapping,
    MappedProduct,
)
from kitchensync.shared.cache_utils import canonical_list
from kitchensync.shared.constants import CacheNamespace, SpoonacularConfig
from kitchensync.shared.errors import create_validation_error
from kitchensync.shared.utils.payload import (
    as_list,
    as_mapping,
    optional_int,
    optional_str,
    require_text,
)


@dataclass(frozen=True)
class IngredientMapParams:
    ingredients: tuple[str, ...]
    servings: int | None = None


def _mapped_products(value: Any) -> list[MappedProduct]:
    products = []
    for row in as_list(value):
        item = as_mapping(row)
        product_id = optional_int(item.get("id"))
        if product_id is None:
            continue
        upc = item.get("upc")
        products.append(
            MappedProduct(
                id=product_id,
                title=optional_str(item.get("title")),
                upc=str(upc) if isinstance(upc, int) and not isinstance(upc, bool) else optional_str(upc),
            )
        )
    return products


class IngredientMapLookup(LookupStrategy[IngredientMapParams, IngredientMapResponse]):
    namespace = CacheNamespace.INGREDIENT_MAP
    operation = "map_ingredients_to_products"
    item_model = IngredientProductMapping
    response_model = IngredientMapResponse

    def validate(self, params: IngredientMapParams) -> None:
        if not canonical_list(params.ingredients):
            raise create_validation_error(
                "At least one ingredient is required",
                field="ingredients",
                operation=self.operation,
            )
        if params.servings is not None and params.servings < 1:
            raise create_validation_error(
                f"Servings must be at least 1, got: {params.servings}",
                field="servings",
                operation=self.operation,
            )

    def key_fields(self, params: IngredientMapParams) -> dict[str, Any]:
        return {
            "ingredients": canonical_list(params.ingredients),
            "servings": params.servings,
        }

    def build_request(self, params: IngredientMapParams) -> ProviderRequest:
        fields = self.key_fields(params)
        body: dict[str, Any] = {"ingredients": fields["ingredients"]}
        if fields["servings"] is not None:
            body["servings"] = fields["servings"]
        return ProviderRequest(
            path=SpoonacularConfig.INGREDIENT_MAP_ENDPOINT,
            method="POST",
            json_body=body,
        )

    def normalize(
        self,
        raw: Any,
        params: IngredientMapParams,
        cache_key: str,
    ) -> IngredientMapResponse:
        rows = raw if isinstance(raw, list) else as_list(as_mapping(raw).get("results"))
        results = []
        for row in rows:
            item = as_mapping(row)
            results.append(
                IngredientProductMapping(
                    original=require_text(item, "original", "ingredient mapping"),
                    original_name=optional_str(item.get("originalName")),
                    ingredient_image=ingredient_image(item.get("ingredientImage")),
                    products=_mapped_products(item.get("products")),
                )
            )
        return IngredientMapResponse(
            results=results,
            total_results=len(results),
            cached=False,
            cache_key=cache_key,
        )
