"""Lookup result models.

Every lookup answers with the same envelope: ``results``, ``totalResults``,
``cached`` and ``cacheKey``, serialized with camelCase aliases. Detail
lookups carry a single element in ``results``.

These models ignore unknown fields so that cache entries written by newer
or older versions still validate.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResultModel(BaseModel):
    """Base model with camelCase aliases, accepting field names too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible dict using the public camelCase names."""
        return self.model_dump(mode="json", by_alias=True)


ItemT = TypeVar("ItemT", bound=ResultModel)


class LookupResponse(ResultModel, Generic[ItemT]):
    """Uniform lookup envelope."""

    results: list[ItemT] = Field(default_factory=list)
    total_results: int = 0
    cached: bool = False
    cache_key: str | None = None


# Ingredients


class IngredientSearchResult(ResultModel):
    """One ingredient search hit.

    Example:
        >>> IngredientSearchResult(id=9003, name="apple", image=None).to_payload()
        {'id': 9003, 'name': 'apple', 'image': None, 'aisle': None}
    """

    id: int
    name: str
    image: str | None = None
    aisle: str | None = None


class IngredientSearchResponse(LookupResponse[IngredientSearchResult]):
    applied_intolerances: list[str] = Field(default_factory=list)


class IngredientInfo(ResultModel):
    id: int
    name: str
    aisle: str | None = None
    image: str | None = None
    possible_units: list[str] = Field(default_factory=list)
    nutrition: dict[str, Any] | None = None


class IngredientInfoResponse(LookupResponse[IngredientInfo]):
    pass


# Grocery products


class GrocerySearchResult(ResultModel):
    id: int
    title: str
    image: str | None = None


class GrocerySearchResponse(LookupResponse[GrocerySearchResult]):
    pass


class GroceryProduct(ResultModel):
    """Grocery product detail."""

    id: int
    title: str
    image: str | None = None
    badges: list[str] = Field(default_factory=list)
    nutrition: dict[str, Any] | None = None
    ingredient_list: str | None = None
    upc: str | None = None
    servings: dict[str, Any] | None = None
    price: int | float | None = None
    aisle: str | None = None
    brand: str | None = None


class GroceryProductResponse(LookupResponse[GroceryProduct]):
    pass


# Ingredient to product mapping


class MappedProduct(ResultModel):
    id: int
    title: str | None = None
    upc: str | None = None


class IngredientProductMapping(ResultModel):
    """Grocery products matching one free-text ingredient line."""

    original: str
    original_name: str | None = None
    ingredient_image: str | None = None
    products: list[MappedProduct] = Field(default_factory=list)


class IngredientMapResponse(LookupResponse[IngredientProductMapping]):
    pass


# Recipes


class RecipeIngredient(ResultModel):
    name: str
    original: str


class NormalizedRecipe(ResultModel):
    """Recipe summary shared by search results and recipe detail."""

    id: int
    title: str
    image: str | None = None
    ready_in_minutes: int | float | None = None
    aggregate_likes: int | float | None = None
    health_score: int | float | None = None
    source_url: str | None = None
    diets: list[str] = Field(default_factory=list)
    instructions: str | None = None
    extended_ingredients: list[RecipeIngredient] | None = None
    used_ingredient_count: int | None = None
    missed_ingredient_count: int | None = None
    used_ingredients: list[RecipeIngredient] | None = None
    missed_ingredients: list[RecipeIngredient] | None = None
    nutrition: dict[str, Any] | None = None


RecipeEndpoint = Literal["complexSearch", "findByIngredients"]


class RecipeSearchResponse(LookupResponse[NormalizedRecipe]):
    endpoint: RecipeEndpoint = "complexSearch"


class RecipeInfoResponse(LookupResponse[NormalizedRecipe]):
    pass


__all__ = [
    "GroceryProduct",
    "GroceryProductResponse",
    "GrocerySearchResponse",
    "GrocerySearchResult",
    "IngredientInfo",
    "IngredientInfoResponse",
    "IngredientMapResponse",
    "IngredientProductMapping",
    "IngredientSearchResponse",
    "IngredientSearchResult",
    "LookupResponse",
    "MappedProduct",
    "NormalizedRecipe",
    "RecipeEndpoint",
    "RecipeIngredient",
    "RecipeInfoResponse",
    "RecipeSearchResponse",
    "ResultModel",
]
