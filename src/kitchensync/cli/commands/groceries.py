"""Grocery product commands: ``groceries search|product|upc``."""

from __future__ import annotations

import typer

from kitchensync.cli.output import render_details, render_table, run_lookup
from kitchensync.services.lookups.models import GroceryProductResponse, GrocerySearchResponse
from kitchensync.shared.constants import SpoonacularConfig

app = typer.Typer(help="Search packaged grocery products.", no_args_is_help=True)


def _render_search(response: GrocerySearchResponse) -> None:
    render_table(
        "Grocery products",
        [
            ("ID", lambda item: item.id),
            ("Title", lambda item: item.title),
            ("Image", lambda item: item.image),
        ],
        response.results,
        response,
    )


def _render_product(response: GroceryProductResponse) -> None:
    for product in response.results:
        render_details(
            product.title,
            [
                ("ID", product.id),
                ("Brand", product.brand),
                ("Aisle", product.aisle),
                ("UPC", product.upc),
                ("Price", product.price),
                ("Badges", product.badges),
                ("Ingredients", product.ingredient_list),
                ("Image", product.image),
            ],
        )


@app.command("search")
def search_command(
    query: str = typer.Argument(..., help="Product search text, e.g. 'milk'"),
    number: int = typer.Option(
        SpoonacularConfig.DEFAULT_RESULT_COUNT,
        "--number",
        "-n",
        help="Number of results (1-24)",
    ),
) -> None:
    """
    Search packaged grocery products.

    Examples:
        kitchensync groceries search milk

        kitchensync --json groceries search "greek yogurt" -n 5
    """
    run_lookup(
        "groceries search",
        lambda broker: broker.search_groceries(query, number),
        _render_search,
    )


@app.command("product")
def product_command(
    product_id: int = typer.Argument(..., help="Provider product id"),
) -> None:
    """Show one grocery product by id."""
    run_lookup(
        "groceries product",
        lambda broker: broker.get_grocery_product(product_id),
        _render_product,
    )


@app.command("upc")
def upc_command(
    upc: str = typer.Argument(..., help="Product barcode (digits only)"),
) -> None:
    """Show one grocery product by UPC barcode."""
    run_lookup(
        "groceries upc",
        lambda broker: broker.get_grocery_product_by_upc(upc),
        _render_product,
    )
