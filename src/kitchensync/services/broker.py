"""Food data broker facade.

One method per lookup domain. Each method packs its arguments into the
domain's parameter object and runs it through the shared read-through
lookup, so every domain gets the same cache and throttle behavior.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from kitchensync.config.models import CacheSettings, Settings
from kitchensync.services.lookups import (
    GroceryProductLookup,
    GroceryProductParams,
    GroceryProductResponse,
    GrocerySearchLookup,
    GrocerySearchParams,
    GrocerySearchResponse,
    GroceryUpcLookup,
    GroceryUpcParams,
    IngredientInfoLookup,
    IngredientInfoParams,
    IngredientInfoResponse,
    IngredientMapLookup,
    IngredientMapParams,
    IngredientMapResponse,
    IngredientSearchLookup,
    IngredientSearchParams,
    IngredientSearchResponse,
    RecipeInfoLookup,
    RecipeInfoParams,
    RecipeInfoResponse,
    RecipeSearchLookup,
    RecipeSearchParams,
    RecipeSearchResponse,
)
from kitchensync.services.memory_cache import MemoryCacheStore
from kitchensync.services.read_through import ReadThroughLookup
from kitchensync.services.request_throttle import RequestThrottle
from kitchensync.services.spoonacular import SpoonacularClient
from kitchensync.services.sqlite_cache import SQLiteCacheDB
from kitchensync.shared.constants import SpoonacularConfig

logger = logging.getLogger(__name__)

CacheStore = SQLiteCacheDB | MemoryCacheStore


def build_cache_store(settings: CacheSettings) -> CacheStore:
    """Create the configured cache backend.

    Raises:
        CacheStorageError: If the SQLite database cannot be opened
    """
    if settings.backend == "memory":
        return MemoryCacheStore(default_ttl=settings.ttl_seconds)
    return SQLiteCacheDB(db_path=settings.db_path, default_ttl=settings.ttl_seconds)


def _as_tuple(values: Iterable[str] | str | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _filter_values(values: Iterable[str] | str | None) -> tuple[str, ...]:
    """Like _as_tuple, but a single string is a comma-separated list."""
    if isinstance(values, str):
        return tuple(values.split(","))
    return _as_tuple(values)


class FoodDataBroker:
    """Rate-limited, cache-backed access to the food data provider.

    Args:
        client: Throttled provider client
        cache_store: Cache consulted before every provider call
        default_ttl: Lifetime of cached answers in seconds
    """

    def __init__(
        self,
        client: SpoonacularClient,
        cache_store: CacheStore,
        default_ttl: int | None = None,
    ) -> None:
        self.client = client
        self.cache_store = cache_store
        self.read_through = ReadThroughLookup(cache_store, client, default_ttl=default_ttl)

        self._ingredient_search = IngredientSearchLookup()
        self._ingredient_info = IngredientInfoLookup()
        self._grocery_search = GrocerySearchLookup()
        self._grocery_product = GroceryProductLookup()
        self._grocery_upc = GroceryUpcLookup()
        self._ingredient_map = IngredientMapLookup()
        self._recipe_search = RecipeSearchLookup()
        self._recipe_info = RecipeInfoLookup()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        throttle: RequestThrottle | None = None,
    ) -> FoodDataBroker:
        """Build a broker and its collaborators from settings.

        Raises:
            ConfigurationError: If no provider credentials are configured
            CacheStorageError: If the SQLite database cannot be opened
        """
        provider = settings.api.spoonacular
        if throttle is None:
            throttle = RequestThrottle(
                max_concurrent_requests=provider.max_concurrent_requests,
                min_interval_millis=provider.min_interval_millis,
            )
        client = SpoonacularClient(provider, throttle)
        return cls(
            client=client,
            cache_store=build_cache_store(settings.cache),
            default_ttl=settings.cache.ttl_seconds,
        )

    # Ingredients

    def search_ingredients(
        self,
        query: str,
        limit: int = SpoonacularConfig.DEFAULT_RESULT_COUNT,
        offset: int = 0,
        intolerances: Iterable[str] | str | None = None,
    ) -> IngredientSearchResponse:
        params = IngredientSearchParams(
            query=query,
            limit=limit,
            offset=offset,
            intolerances=_filter_values(intolerances),
        )
        return self.read_through.execute(self._ingredient_search, params)

    def get_ingredient_info(
        self,
        ingredient_id: int,
        amount: float = 1,
        unit: str | None = None,
    ) -> IngredientInfoResponse:
        params = IngredientInfoParams(ingredient_id=ingredient_id, amount=amount, unit=unit)
        return self.read_through.execute(self._ingredient_info, params)

    # Grocery products

    def search_groceries(
        self,
        query: str,
        number: int = SpoonacularConfig.DEFAULT_RESULT_COUNT,
    ) -> GrocerySearchResponse:
        return self.read_through.execute(
            self._grocery_search,
            GrocerySearchParams(query=query, number=number),
        )

    def get_grocery_product(self, product_id: int) -> GroceryProductResponse:
        return self.read_through.execute(
            self._grocery_product,
            GroceryProductParams(product_id=product_id),
        )

    def get_grocery_product_by_upc(self, upc: str) -> GroceryProductResponse:
        return self.read_through.execute(self._grocery_upc, GroceryUpcParams(upc=upc))

    def map_ingredients_to_products(
        self,
        ingredients: Iterable[str] | str,
        servings: int | None = None,
    ) -> IngredientMapResponse:
        params = IngredientMapParams(ingredients=_as_tuple(ingredients), servings=servings)
        return self.read_through.execute(self._ingredient_map, params)

    # Recipes

    def search_recipes(
        self,
        query: str | None = None,
        include_ingredients: Iterable[str] | str | None = None,
        diet: Iterable[str] | str | None = None,
        intolerances: Iterable[str] | str | None = None,
        cuisines: Iterable[str] | str | None = None,
        exclude_cuisines: Iterable[str] | str | None = None,
        max_ready_time: int | None = None,
        sort: str | None = None,
        number: int = SpoonacularConfig.DEFAULT_RESULT_COUNT,
    ) -> RecipeSearchResponse:
        params = RecipeSearchParams(
            query=query,
            include_ingredients=_filter_values(include_ingredients),
            diet=_filter_values(diet),
            intolerances=_filter_values(intolerances),
            cuisines=_filter_values(cuisines),
            exclude_cuisines=_filter_values(exclude_cuisines),
            max_ready_time=max_ready_time,
            sort=sort,
            number=number,
        )
        return self.read_through.execute(self._recipe_search, params)

    def get_recipe_info(
        self,
        recipe_id: int,
        include_nutrition: bool = True,
    ) -> RecipeInfoResponse:
        params = RecipeInfoParams(recipe_id=recipe_id, include_nutrition=include_nutrition)
        return self.read_through.execute(self._recipe_info, params)

    # Maintenance

    def cache_info(self) -> dict[str, Any]:
        return self.cache_store.get_cache_info()

    def purge_expired(self) -> int:
        """Delete stale cache rows. Lookups never call this."""
        return self.cache_store.purge_expired()

    def clear_cache(self, namespace: str | None = None) -> int:
        return self.cache_store.clear(namespace)

    def get_stats(self) -> dict[str, Any]:
        return {
            "lookups": self.read_through.get_stats(),
            "client": self.client.get_stats(),
        }

    def close(self) -> None:
        self.client.close()
        self.cache_store.close()
        logger.debug("Food data broker closed")
