"""
Cache Configuration Constants

Settings of the read-through response cache and the namespaces each
lookup domain derives its cache keys in.
"""

from .system import BASE_HOUR


class CacheConfig:
    """Response cache configuration."""

    DEFAULT_TTL = 12 * BASE_HOUR
    TABLE_NAME = "recipe_cache"
    DEFAULT_DB_PATH = ".kitchensync/recipe_cache.db"

    BACKEND_SQLITE = "sqlite"
    BACKEND_MEMORY = "memory"


class CacheNamespace:
    """Cache key namespaces, one per lookup domain."""

    INGREDIENTS = "ingredients"
    INGREDIENT_INFO = "ingredient-info"
    GROCERIES = "groceries"
    GROCERY_PRODUCT = "grocery-product"
    GROCERY_UPC = "grocery-upc"
    INGREDIENT_MAP = "map"
    RECIPES = "recipes"
    RECIPE_INFO = "recipe-info"

    ALL = (
        INGREDIENTS,
        INGREDIENT_INFO,
        GROCERIES,
        GROCERY_PRODUCT,
        GROCERY_UPC,
        INGREDIENT_MAP,
        RECIPES,
        RECIPE_INFO,
    )
