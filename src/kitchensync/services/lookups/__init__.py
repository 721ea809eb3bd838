"""Lookup domains: parameters, cache keys, provider requests and result models."""

from kitchensync.services.lookups.base import LookupStrategy, ProviderRequest
from kitchensync.services.lookups.groceries import (
    GroceryProductLookup,
    GroceryProductParams,
    GrocerySearchLookup,
    GrocerySearchParams,
    GroceryUpcLookup,
    GroceryUpcParams,
)
from kitchensync.services.lookups.ingredient_map import (
    IngredientMapLookup,
    IngredientMapParams,
)
from kitchensync.services.lookups.ingredients import (
    IngredientInfoLookup,
    IngredientInfoParams,
    IngredientSearchLookup,
    IngredientSearchParams,
)
from kitchensync.services.lookups.models import (
    GroceryProduct,
    GroceryProductResponse,
    GrocerySearchResponse,
    GrocerySearchResult,
    IngredientInfo,
    IngredientInfoResponse,
    IngredientMapResponse,
    IngredientProductMapping,
    IngredientSearchResponse,
    IngredientSearchResult,
    LookupResponse,
    MappedProduct,
    NormalizedRecipe,
    RecipeIngredient,
    RecipeInfoResponse,
    RecipeSearchResponse,
)
from kitchensync.services.lookups.recipes import (
    RecipeInfoLookup,
    RecipeInfoParams,
    RecipeSearchLookup,
    RecipeSearchParams,
)

__all__ = [
    "GroceryProduct",
    "GroceryProductLookup",
    "GroceryProductParams",
    "GroceryProductResponse",
    "GrocerySearchLookup",
    "GrocerySearchParams",
    "GrocerySearchResponse",
    "GrocerySearchResult",
    "GroceryUpcLookup",
    "GroceryUpcParams",
    "IngredientInfo",
    "IngredientInfoLookup",
    "IngredientInfoParams",
    "IngredientInfoResponse",
    "IngredientMapLookup",
    "IngredientMapParams",
    "IngredientMapResponse",
    "IngredientProductMapping",
    "IngredientSearchLookup",
    "IngredientSearchParams",
    "IngredientSearchResponse",
    "IngredientSearchResult",
    "LookupResponse",
    "LookupStrategy",
    "MappedProduct",
    "NormalizedRecipe",
    "ProviderRequest",
    "RecipeIngredient",
    "RecipeInfoLookup",
    "RecipeInfoParams",
    "RecipeInfoResponse",
    "RecipeSearchLookup",
    "RecipeSearchParams",
    "RecipeSearchResponse",
]
