"""Process-wide lookup functions.

The functions in this module share one broker, and therefore one request
throttle and one cache store, per process. The broker is built lazily on
first use from the loaded configuration, or explicitly with
``init_broker()``; ``shutdown_broker()`` rejects waiting provider calls and
releases the cache and HTTP resources.

Example:
    >>> from kitchensync import search_groceries
    >>> response = search_groceries("milk")
    >>> response.cached
    False
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from dependency_injector import providers

from kitchensync.config.models import Settings
from kitchensync.containers import Container
from kitchensync.services.broker import FoodDataBroker
from kitchensync.services.lookups import (
    GroceryProductResponse,
    GrocerySearchResponse,
    IngredientInfoResponse,
    IngredientMapResponse,
    IngredientSearchResponse,
    RecipeInfoResponse,
    RecipeSearchResponse,
)
from kitchensync.shared.constants import SpoonacularConfig

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_container: Container | None = None
_broker: FoodDataBroker | None = None


def init_broker(settings: Settings | None = None) -> FoodDataBroker:
    """Build the process-wide broker if it does not exist yet.

    Args:
        settings: Settings to use instead of the loaded configuration

    Raises:
        ConfigurationError: If no provider credentials are configured
        CacheStorageError: If the SQLite cache cannot be opened
    """
    global _container, _broker

    with _lock:
        if _broker is not None:
            return _broker

        container = Container()
        if settings is not None:
            container.config.override(providers.Object(settings))
        broker = container.broker()

        _container = container
        _broker = broker
        logger.debug("Process-wide food data broker initialized")
        return broker


def get_broker() -> FoodDataBroker:
    broker = _broker
    if broker is None:
        return init_broker()
    return broker


def shutdown_broker() -> None:
    """Shut down the throttle and close the broker. Safe to call twice."""
    global _container, _broker

    with _lock:
        if _broker is None or _container is None:
            return
        _container.throttle().shutdown()
        _broker.close()
        _container.reset_singletons()
        _container.config.reset_override()
        _container = None
        _broker = None
        logger.debug("Process-wide food data broker shut down")


def search_ingredients(
    query: str,
    limit: int = SpoonacularConfig.DEFAULT_RESULT_COUNT,
    offset: int = 0,
    intolerances: Iterable[str] | str | None = None,
) -> IngredientSearchResponse:
    return get_broker().search_ingredients(query, limit, offset, intolerances)


def get_ingredient_info(
    ingredient_id: int,
    amount: float = 1,
    unit: str | None = None,
) -> IngredientInfoResponse:
    return get_broker().get_ingredient_info(ingredient_id, amount, unit)


def search_groceries(
    query: str,
    number: int = SpoonacularConfig.DEFAULT_RESULT_COUNT,
) -> GrocerySearchResponse:
    return get_broker().search_groceries(query, number)


def get_grocery_product(product_id: int) -> GroceryProductResponse:
    return get_broker().get_grocery_product(product_id)


def get_grocery_product_by_upc(upc: str) -> GroceryProductResponse:
    return get_broker().get_grocery_product_by_upc(upc)


def map_ingredients_to_products(
    ingredients: Iterable[str] | str,
    servings: int | None = None,
) -> IngredientMapResponse:
    return get_broker().map_ingredients_to_products(ingredients, servings)


def search_recipes(
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
    return get_broker().search_recipes(
        query=query,
        include_ingredients=include_ingredients,
        diet=diet,
        intolerances=intolerances,
        cuisines=cuisines,
        exclude_cuisines=exclude_cuisines,
        max_ready_time=max_ready_time,
        sort=sort,
        number=number,
    )


def get_recipe_info(recipe_id: int, include_nutrition: bool = True) -> RecipeInfoResponse:
    return get_broker().get_recipe_info(recipe_id, include_nutrition)
