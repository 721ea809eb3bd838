"""Recipe commands: ``recipes search`` and ``recipes info``."""

from __future__ import annotations

from typing import Optional

import typer

from kitchensync.cli.output import render_details, render_table, run_lookup
from kitchensync.services.lookups.models import RecipeInfoResponse, RecipeSearchResponse
from kitchensync.shared.constants import SpoonacularConfig

app = typer.Typer(help="Discover recipes and show recipe details.", no_args_is_help=True)


def _render_search(response: RecipeSearchResponse) -> None:
    if response.endpoint == "findByIngredients":
        columns = [
            ("ID", lambda item: item.id),
            ("Title", lambda item: item.title),
            ("Used", lambda item: item.used_ingredient_count),
            ("Missing", lambda item: item.missed_ingredient_count),
            ("Likes", lambda item: item.aggregate_likes),
        ]
    else:
        columns = [
            ("ID", lambda item: item.id),
            ("Title", lambda item: item.title),
            ("Ready (min)", lambda item: item.ready_in_minutes),
            ("Health", lambda item: item.health_score),
            ("Diets", lambda item: item.diets),
        ]
    render_table("Recipes", columns, response.results, response)


def _render_info(response: RecipeInfoResponse) -> None:
    for recipe in response.results:
        ingredients = [entry.original for entry in recipe.extended_ingredients or []]
        render_details(
            recipe.title,
            [
                ("ID", recipe.id),
                ("Ready in (min)", recipe.ready_in_minutes),
                ("Likes", recipe.aggregate_likes),
                ("Health score", recipe.health_score),
                ("Diets", recipe.diets),
                ("Ingredients", ingredients),
                ("Source", recipe.source_url),
            ],
        )


@app.command("search")
def search_command(
    query: Optional[str] = typer.Argument(None, help="Keyword, e.g. 'pasta'"),
    ingredient: Optional[list[str]] = typer.Option(
        None,
        "--ingredient",
        "-i",
        help="Ingredient the recipe should use (repeatable)",
    ),
    diet: Optional[list[str]] = typer.Option(None, "--diet", help="Diet filter (repeatable)"),
    intolerance: Optional[list[str]] = typer.Option(
        None,
        "--intolerance",
        help="Intolerance to exclude (repeatable)",
    ),
    cuisine: Optional[list[str]] = typer.Option(None, "--cuisine", help="Cuisine to include (repeatable)"),
    exclude_cuisine: Optional[list[str]] = typer.Option(
        None,
        "--exclude-cuisine",
        help="Cuisine to exclude (repeatable)",
    ),
    max_ready_time: Optional[int] = typer.Option(
        None,
        "--max-ready-time",
        help="Maximum preparation time in minutes",
    ),
    sort: Optional[str] = typer.Option(
        None,
        "--sort",
        help="Sort order, e.g. popularity or min-missing-ingredients",
    ),
    number: int = typer.Option(
        SpoonacularConfig.DEFAULT_RESULT_COUNT,
        "--number",
        "-n",
        help="Number of results (1-24)",
    ),
) -> None:
    """
    Search recipes by keyword and/or ingredients.

    Without a keyword, recipes are ranked by the given ingredients.

    Examples:
        kitchensync recipes search pasta --diet vegetarian --max-ready-time 30

        kitchensync recipes search -i tomato -i basil --sort min-missing-ingredients
    """
    run_lookup(
        "recipes search",
        lambda broker: broker.search_recipes(
            query=query,
            include_ingredients=ingredient,
            diet=diet,
            intolerances=intolerance,
            cuisines=cuisine,
            exclude_cuisines=exclude_cuisine,
            max_ready_time=max_ready_time,
            sort=sort,
            number=number,
        ),
        _render_search,
    )


@app.command("info")
def info_command(
    recipe_id: int = typer.Argument(..., help="Provider recipe id"),
    include_nutrition: bool = typer.Option(
        True,
        "--nutrition/--no-nutrition",
        help="Include nutrition information",
    ),
) -> None:
    """Show one recipe by id."""
    run_lookup(
        "recipes info",
        lambda broker: broker.get_recipe_info(recipe_id, include_nutrition),
        _render_info,
    )
