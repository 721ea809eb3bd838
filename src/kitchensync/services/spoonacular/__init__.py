"""Spoonacular provider client."""

from kitchensync.services.spoonacular.client import (
    SpoonacularAuth,
    SpoonacularClient,
    resolve_auth,
)

__all__ = ["SpoonacularAuth", "SpoonacularClient", "resolve_auth"]
