"""Recipe search and recipe detail lookups.

Search goes to one of two provider endpoints. A keyword search (with or
without ingredients) uses ``complexSearch``; an ingredient-only search
uses ``findByIngredients``, which ranks recipes by how many of the given
ingredients they use or miss.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kitchensync.services.lookups.base import LookupStrategy, ProviderRequest, clamp
from kitchensync.services.lookups.filters import (
    normalize_cuisine_filters,
    normalize_diet_filters,
    normalize_intolerance_filters,
)
from kitchensync.services.lookups.images import recipe_image, recipe_source_url
from kitchensync.services.lookups.models import (
    NormalizedRecipe,
    RecipeEndpoint,
    RecipeInfoResponse,
    RecipeIngredient,
    RecipeSearchResponse,
)
from kitchensync.shared.cache_utils import canonical_list, canonical_text
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

COMPLEX_SEARCH: RecipeEndpoint = "complexSearch"
FIND_BY_INGREDIENTS: RecipeEndpoint = "findByIngredients"


@dataclass(frozen=True)
class RecipeSearchParams:
    query: str | None = None
    include_ingredients: tuple[str, ...] = ()
    diet: tuple[str, ...] = ()
    intolerances: tuple[str, ...] = ()
    cuisines: tuple[str, ...] = ()
    exclude_cuisines: tuple[str, ...] = ()
    max_ready_time: int | None = None
    sort: str | None = None
    number: int = SpoonacularConfig.DEFAULT_RESULT_COUNT


@dataclass(frozen=True)
class RecipeInfoParams:
    recipe_id: int
    include_nutrition: bool = True


def recipe_ingredients(value: Any) -> list[RecipeIngredient] | None:
    """Project an ingredient list; ``name`` and ``original`` stand in for each other.

    Returns None when the provider sent no list at all.
    """
    if not isinstance(value, list):
        return None
    ingredients = []
    for entry in value:
        item = as_mapping(entry)
        name = optional_str(item.get("name"))
        original = optional_str(item.get("original")) or name
        if not name and not original:
            continue
        ingredients.append(RecipeIngredient(name=name or original, original=original))
    return ingredients


def normalize_recipe(raw: Any, endpoint: RecipeEndpoint = COMPLEX_SEARCH) -> NormalizedRecipe:
    """Project one provider recipe row.

    ``findByIngredients`` rows report ``likes`` instead of ``aggregateLikes``
    and always carry used/missed counts.

    Raises:
        NormalizationError: If the row has no id or title
    """
    row = as_mapping(raw)
    recipe_id = require_int(row, "id", "recipe")
    title = require_text(row, "title", "recipe")
    used = recipe_ingredients(row.get("usedIngredients"))
    missed = recipe_ingredients(row.get("missedIngredients"))

    if endpoint == FIND_BY_INGREDIENTS:
        used_count = optional_int(row.get("usedIngredientCount"))
        missed_count = optional_int(row.get("missedIngredientCount"))
        return NormalizedRecipe(
            id=recipe_id,
            title=title,
            image=recipe_image(row.get("image")),
            aggregate_likes=optional_number(row.get("likes")) or 0,
            used_ingredient_count=used_count if used_count is not None else len(used or []),
            missed_ingredient_count=missed_count if missed_count is not None else len(missed or []),
            used_ingredients=used,
            missed_ingredients=missed,
            source_url=recipe_source_url(title, recipe_id),
        )

    return NormalizedRecipe(
        id=recipe_id,
        title=title,
        image=recipe_image(row.get("image")),
        ready_in_minutes=optional_number(row.get("readyInMinutes")),
        aggregate_likes=optional_number(row.get("aggregateLikes")),
        health_score=optional_number(row.get("healthScore")),
        instructions=optional_str(row.get("instructions")),
        diets=string_list(row.get("diets")),
        extended_ingredients=recipe_ingredients(row.get("extendedIngredients")),
        used_ingredient_count=optional_int(row.get("usedIngredientCount")),
        missed_ingredient_count=optional_int(row.get("missedIngredientCount")),
        used_ingredients=used,
        missed_ingredients=missed,
        source_url=recipe_source_url(title, recipe_id),
        nutrition=as_mapping(row.get("nutrition")) or None,
    )


class RecipeSearchLookup(LookupStrategy[RecipeSearchParams, RecipeSearchResponse]):
    """Recipe search by keyword, ingredients and filters."""

    namespace = CacheNamespace.RECIPES
    operation = "search_recipes"
    item_model = NormalizedRecipe
    response_model = RecipeSearchResponse

    def validate(self, params: RecipeSearchParams) -> None:
        if not canonical_text(params.query) and not canonical_list(params.include_ingredients):
            raise create_validation_error(
                "Please provide a keyword or at least one ingredient to search.",
                field="query",
                operation=self.operation,
            )

    def endpoint_for(self, params: RecipeSearchParams) -> RecipeEndpoint:
        if not canonical_text(params.query) and canonical_list(params.include_ingredients):
            return FIND_BY_INGREDIENTS
        return COMPLEX_SEARCH

    def query_params(self, params: RecipeSearchParams) -> dict[str, str]:
        """Provider query parameters, built in a fixed order."""
        number = str(clamp(params.number, 1, SpoonacularConfig.RECIPE_SEARCH_MAX))
        ingredients = canonical_list(params.include_ingredients)
        sort = canonical_text(params.sort) if params.sort else ""

        if self.endpoint_for(params) == FIND_BY_INGREDIENTS:
            ranking = (
                SpoonacularConfig.RANKING_MINIMIZE_MISSING
                if sort == SpoonacularConfig.SORT_MIN_MISSING_INGREDIENTS
                else SpoonacularConfig.RANKING_MAXIMIZE_USED
            )
            return {
                "number": number,
                "ingredients": ",".join(ingredients),
                "ranking": str(ranking),
            }

        query_params = {
            "number": number,
            "instructionsRequired": "true",
            "addRecipeInformation": "true",
            "fillIngredients": "true",
        }
        if params.max_ready_time:
            query_params["maxReadyTime"] = str(max(1, params.max_ready_time))
        if sort:
            query_params["sort"] = sort
        if ingredients:
            query_params["includeIngredients"] = ",".join(ingredients)

        filters = (
            ("diet", normalize_diet_filters(params.diet)),
            ("intolerances", normalize_intolerance_filters(params.intolerances)),
            ("cuisine", normalize_cuisine_filters(params.cuisines)),
            ("excludeCuisine", normalize_cuisine_filters(params.exclude_cuisines)),
        )
        for name, values in filters:
            if values:
                query_params[name] = ",".join(values)

        query_params["query"] = canonical_text(params.query)
        return query_params

    def key_fields(self, params: RecipeSearchParams) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint_for(params),
            "params": self.query_params(params),
        }

    def build_request(self, params: RecipeSearchParams) -> ProviderRequest:
        endpoint = self.endpoint_for(params)
        path = (
            SpoonacularConfig.RECIPE_BY_INGREDIENTS_ENDPOINT
            if endpoint == FIND_BY_INGREDIENTS
            else SpoonacularConfig.RECIPE_COMPLEX_SEARCH_ENDPOINT
        )
        return ProviderRequest(path=path, params=self.query_params(params))

    def normalize(
        self,
        raw: Any,
        params: RecipeSearchParams,
        cache_key: str,
    ) -> RecipeSearchResponse:
        endpoint = self.endpoint_for(params)
        if endpoint == FIND_BY_INGREDIENTS:
            rows = as_list(raw)
            total = None
        else:
            payload = as_mapping(raw)
            rows = as_list(payload.get("results"))
            total = optional_int(payload.get("totalResults"))

        results = [normalize_recipe(row, endpoint) for row in rows]
        return RecipeSearchResponse(
            results=results,
            total_results=total if total is not None else len(results),
            cached=False,
            cache_key=cache_key,
            endpoint=endpoint,
        )


class RecipeInfoLookup(LookupStrategy[RecipeInfoParams, RecipeInfoResponse]):
    """Full recipe detail, optionally with nutrition."""

    namespace = CacheNamespace.RECIPE_INFO
    operation = "get_recipe_info"
    item_model = NormalizedRecipe
    response_model = RecipeInfoResponse

    def validate(self, params: RecipeInfoParams) -> None:
        if params.recipe_id <= 0:
            raise create_validation_error(
                f"Invalid recipe id: {params.recipe_id}",
                field="recipe_id",
                operation=self.operation,
            )

    def key_fields(self, params: RecipeInfoParams) -> dict[str, Any]:
        return {
            "id": params.recipe_id,
            "includeNutrition": "true" if params.include_nutrition else "false",
        }

    def build_request(self, params: RecipeInfoParams) -> ProviderRequest:
        fields = self.key_fields(params)
        return ProviderRequest(
            path=SpoonacularConfig.RECIPE_INFO_ENDPOINT.format(recipe_id=params.recipe_id),
            params={"includeNutrition": fields["includeNutrition"]},
        )

    def normalize(
        self,
        raw: Any,
        params: RecipeInfoParams,
        cache_key: str,
    ) -> RecipeInfoResponse:
        return RecipeInfoResponse(
            results=[normalize_recipe(raw, COMPLEX_SEARCH)],
            total_results=1,
            cached=False,
            cache_key=cache_key,
        )
