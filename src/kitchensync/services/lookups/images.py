"""Provider image and link expansion."""

from __future__ import annotations

import re
from typing import Any

from kitchensync.shared.constants import SpoonacularConfig

_WHITESPACE = re.compile(r"\s+")


def ingredient_image(image: Any) -> str | None:
    """Expand an ingredient image file name to a CDN URL."""
    if not isinstance(image, str) or not image.strip():
        return None
    image = image.strip()
    if image == SpoonacularConfig.MISSING_IMAGE_NAME:
        return None
    if image.startswith("http"):
        return image
    return f"{SpoonacularConfig.INGREDIENT_IMAGE_BASE}{image}"


def product_image(product_id: int, image_type: Any) -> str | None:
    """Build a product image URL from its id and image type (e.g. "jpg")."""
    if not isinstance(image_type, str) or not image_type.strip():
        return None
    image_type = image_type.strip()
    if image_type.startswith("http"):
        return image_type
    return SpoonacularConfig.PRODUCT_IMAGE_TEMPLATE.format(
        product_id=product_id,
        image_type=image_type.lstrip("."),
    )


def recipe_image(image: Any) -> str | None:
    if not isinstance(image, str) or not image.strip():
        return None
    image = image.strip()
    if image.startswith("http"):
        return image
    return f"{SpoonacularConfig.RECIPE_IMAGE_BASE}{image}"


def recipe_source_url(title: str, recipe_id: int) -> str:
    """Public recipe page, e.g. https://spoonacular.com/recipes/pasta-bake-42."""
    slug = _WHITESPACE.sub("-", title.strip().lower()) or "recipe"
    return SpoonacularConfig.RECIPE_SOURCE_TEMPLATE.format(slug=slug, recipe_id=recipe_id)
