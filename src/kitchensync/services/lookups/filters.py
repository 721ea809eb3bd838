"""Recipe filter vocabulary.

User-facing diet, intolerance and cuisine labels are folded onto the
tokens the provider understands ("keto" becomes "ketogenic", "gluten-free"
becomes "gluten free"), then de-duplicated and sorted so equal filter sets
always produce the same request.
"""

from __future__ import annotations

from collections.abc import Iterable

from kitchensync.shared.cache_utils import canonical_list

DIET_ALIASES = {
    "keto": "ketogenic",
    "pescatarian": "pescetarian",
}

INTOLERANCE_ALIASES = {
    "peanuts": "peanut",
    "tree nuts": "tree nut",
    "eggs": "egg",
}

CUISINE_ALIASES = {
    "american comfort": "american",
    "bbq smokehouse": "barbecue",
}


def normalize_token(value: str) -> str:
    return " ".join(value.replace("_", " ").replace("-", " ").split()).casefold()


def _normalize(values: Iterable[str] | str | None, aliases: dict[str, str]) -> list[str]:
    tokens = [normalize_token(value) for value in canonical_list(values)]
    return canonical_list(aliases.get(token, token) for token in tokens)


def normalize_diet_filters(values: Iterable[str] | str | None) -> list[str]:
    return _normalize(values, DIET_ALIASES)


def normalize_intolerance_filters(values: Iterable[str] | str | None) -> list[str]:
    return _normalize(values, INTOLERANCE_ALIASES)


def normalize_cuisine_filters(values: Iterable[str] | str | None) -> list[str]:
    return _normalize(values, CUISINE_ALIASES)
