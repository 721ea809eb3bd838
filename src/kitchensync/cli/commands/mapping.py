"""``map`` command: ingredient lines to grocery products."""

from __future__ import annotations

from typing import Optional

import typer

from kitchensync.cli.output import render_table, run_lookup
from kitchensync.services.lookups.models import IngredientMapResponse


def _render(response: IngredientMapResponse) -> None:
    render_table(
        "Ingredient to product mapping",
        [
            ("Ingredient", lambda item: item.original),
            ("Matched name", lambda item: item.original_name),
            ("Products", lambda item: [f"{p.title or p.id} ({p.id})" for p in item.products]),
        ],
        response.results,
        response,
    )


def map_command(
    ingredients: list[str] = typer.Argument(..., help="Ingredient lines, e.g. '2 cups milk'"),
    servings: Optional[int] = typer.Option(None, "--servings", "-s", help="Number of servings"),
) -> None:
    """
    Map free-text ingredient lines to purchasable grocery products.

    Examples:
        kitchensync map "2 cups milk" "1 lb ground beef" --servings 4
    """
    run_lookup(
        "map",
        lambda broker: broker.map_ingredients_to_products(ingredients, servings),
        _render,
    )
