"""Ingredient commands: ``ingredients search`` and ``ingredients info``."""

from __future__ import annotations

from typing import Optional

import typer

from kitchensync.cli.output import render_details, render_table, run_lookup
from kitchensync.services.lookups.models import IngredientInfoResponse, IngredientSearchResponse
from kitchensync.shared.constants import SpoonacularConfig

app = typer.Typer(help="Search ingredients and show ingredient details.", no_args_is_help=True)


def _render_search(response: IngredientSearchResponse) -> None:
    render_table(
        "Ingredients",
        [
            ("ID", lambda item: item.id),
            ("Name", lambda item: item.name),
            ("Aisle", lambda item: item.aisle),
            ("Image", lambda item: item.image),
        ],
        response.results,
        response,
    )


def _render_info(response: IngredientInfoResponse) -> None:
    for info in response.results:
        render_details(
            info.name,
            [
                ("ID", info.id),
                ("Aisle", info.aisle),
                ("Possible units", info.possible_units),
                ("Image", info.image),
                ("Nutrients", len((info.nutrition or {}).get("nutrients", []))),
            ],
        )


@app.command("search")
def search_command(
    query: str = typer.Argument(..., help="Ingredient name to search for"),
    limit: int = typer.Option(
        SpoonacularConfig.DEFAULT_RESULT_COUNT,
        "--limit",
        "-n",
        help="Number of results (1-25)",
    ),
    offset: int = typer.Option(0, "--offset", help="Number of results to skip"),
    intolerance: Optional[list[str]] = typer.Option(
        None,
        "--intolerance",
        "-i",
        help="Exclude ingredients with this intolerance (repeatable)",
    ),
) -> None:
    """
    Search ingredients by name.

    Examples:
        kitchensync ingredients search "apple"

        kitchensync ingredients search flour --intolerance gluten --limit 5
    """
    run_lookup(
        "ingredients search",
        lambda broker: broker.search_ingredients(query, limit, offset, intolerance),
        _render_search,
    )


@app.command("info")
def info_command(
    ingredient_id: int = typer.Argument(..., help="Provider ingredient id"),
    amount: float = typer.Option(1, "--amount", "-a", help="Amount the nutrition refers to"),
    unit: Optional[str] = typer.Option(None, "--unit", "-u", help="Unit of the amount, e.g. grams"),
) -> None:
    """Show aisle, possible units and nutrition of one ingredient."""
    run_lookup(
        "ingredients info",
        lambda broker: broker.get_ingredient_info(ingredient_id, amount, unit),
        _render_info,
    )
