"""
API Configuration Constants

Endpoints, image CDN prefixes and request limits of the Spoonacular API.
"""


class SpoonacularConfig:
    """Spoonacular API configuration constants."""

    # Base URLs
    DIRECT_BASE_URL = "https://api.spoonacular.com"
    DEFAULT_RAPIDAPI_HOST = "spoonacular-recipe-food-nutrition-v1.p.rapidapi.com"

    # Authentication
    API_KEY_PARAM = "apiKey"
    RAPIDAPI_KEY_HEADER = "X-RapidAPI-Key"
    RAPIDAPI_HOST_HEADER = "X-RapidAPI-Host"

    # Endpoints
    INGREDIENT_SEARCH_ENDPOINT = "/food/ingredients/search"
    INGREDIENT_INFO_ENDPOINT = "/food/ingredients/{ingredient_id}/information"
    INGREDIENT_MAP_ENDPOINT = "/food/ingredients/map"
    PRODUCT_SEARCH_ENDPOINT = "/food/products/search"
    PRODUCT_DETAIL_ENDPOINT = "/food/products/{product_id}"
    PRODUCT_UPC_ENDPOINT = "/food/products/upc/{upc}"
    RECIPE_COMPLEX_SEARCH_ENDPOINT = "/recipes/complexSearch"
    RECIPE_BY_INGREDIENTS_ENDPOINT = "/recipes/findByIngredients"
    RECIPE_INFO_ENDPOINT = "/recipes/{recipe_id}/information"

    # Image CDN
    INGREDIENT_IMAGE_BASE = "https://img.spoonacular.com/ingredients_250x250/"
    PRODUCT_IMAGE_TEMPLATE = "https://img.spoonacular.com/products/{product_id}-312x231.{image_type}"
    RECIPE_IMAGE_BASE = "https://img.spoonacular.com/recipes/"
    RECIPE_SOURCE_TEMPLATE = "https://spoonacular.com/recipes/{slug}-{recipe_id}"
    MISSING_IMAGE_NAME = "no.jpg"

    # Result limits
    DEFAULT_RESULT_COUNT = 12
    INGREDIENT_SEARCH_MAX = 25
    PRODUCT_SEARCH_MAX = 24
    RECIPE_SEARCH_MAX = 24

    # Recipe search
    SORT_MIN_MISSING_INGREDIENTS = "min-missing-ingredients"
    RANKING_MAXIMIZE_USED = 1
    RANKING_MINIMIZE_MISSING = 2
