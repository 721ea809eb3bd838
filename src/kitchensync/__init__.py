"""
KitchenSync - Food Data Broker

Rate-limited, cache-backed access to the Spoonacular food and recipe API:
ingredient and grocery product search, ingredient-to-product mapping and
recipe discovery behind a single process-wide request throttle.
"""

__version__ = "0.1.0"
__author__ = "KitchenSync Team"

from .lookups import (
    get_broker,
    get_grocery_product,
    get_grocery_product_by_upc,
    get_ingredient_info,
    get_recipe_info,
    init_broker,
    map_ingredients_to_products,
    search_groceries,
    search_ingredients,
    search_recipes,
    shutdown_broker,
)

__all__ = [
    "get_broker",
    "get_grocery_product",
    "get_grocery_product_by_upc",
    "get_ingredient_info",
    "get_recipe_info",
    "init_broker",
    "map_ingredients_to_products",
    "search_groceries",
    "search_ingredients",
    "search_recipes",
    "shutdown_broker",
]
