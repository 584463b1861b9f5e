"""CLI commands for products and manual stock changes."""

from __future__ import annotations

import click

from stockroom.application.adjust_stock import AdjustStockHandler
from stockroom.application.delete_product import DeleteProductHandler
from stockroom.application.dto import ProductDTO
from stockroom.application.list_products import ListProductsHandler
from stockroom.application.upsert_product import UpsertProductHandler
from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.product import ProductDraft
from stockroom.infrastructure.bootstrap import inventory_engine, product_store
from stockroom.infrastructure.config import Settings


def _echo_product(action: str, dto: ProductDTO) -> None:
    click.echo(
        f"Product {dto.id} '{dto.name}' {action}: "
        f"{dto.stock} {dto.unit} in stock, sells at {dto.sell_price}"
    )


@click.command("add")
@click.option("--name", required=True, help="Product name (at least 2 characters).")
@click.option("--cost-price", required=True, help="Purchase price per unit.")
@click.option("--sell-price", required=True, help="Selling price per unit.")
@click.option("--category", default=None, help="Category (defaults to General).")
@click.option("--barcode", default=None, help="Barcode, if any.")
@click.option("--unit", default=None, help="piece, kilogram, liter or box.")
@click.option("--stock", type=int, default=None, help="Opening stock.")
@click.option("--low-stock-limit", type=int, default=None, help="Replenishment threshold.")
@click.pass_obj
def product_add(settings: Settings, **fields) -> None:
    """Add a new product to the catalogue."""
    handler = UpsertProductHandler(engine=inventory_engine(settings))

    try:
        dto = handler.handle(ProductDraft(**fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product("added", dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--cost-price", default=None, help="New purchase price.")
@click.option("--sell-price", default=None, help="New selling price.")
@click.option("--category", default=None, help="New category.")
@click.option("--barcode", default=None, help="New barcode.")
@click.option("--unit", default=None, help="piece, kilogram, liter or box.")
@click.option("--stock", type=int, default=None, help="Stock count to set.")
@click.option("--low-stock-limit", type=int, default=None, help="New threshold.")
@click.pass_obj
def product_update(settings: Settings, product_id: str, **fields) -> None:
    """Change some fields of a product; the others are kept."""
    handler = UpsertProductHandler(engine=inventory_engine(settings))

    try:
        dto = handler.handle(ProductDraft(**fields), product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product("updated", dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Delete a product. Its past sales stay in the ledger."""
    handler = DeleteProductHandler(engine=inventory_engine(settings))

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")


@click.command("adjust")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
@click.pass_obj
def product_adjust(settings: Settings, product_id: str, delta: int) -> None:
    """Correct stock by a signed amount; never drops below zero."""
    handler = AdjustStockHandler(engine=inventory_engine(settings))

    try:
        dto = handler.handle(product_id, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product("adjusted", dto)


@click.command("list")
@click.option("--query", default="", help="Match name, barcode or category.")
@click.option("--category", default=None, help="Only this category.")
@click.option("--available", is_flag=True, help="Only products in stock, by name.")
@click.pass_obj
def product_list(
    settings: Settings, query: str, category: str | None, available: bool
) -> None:
    """List products, most recently changed first."""
    handler = ListProductsHandler(product_store=product_store(settings))

    try:
        result = handler.handle(query=query, category=category, available=available)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
    else:
        click.echo(
            f"{'ID':<34} {'Name':<20} {'Category':<12} {'Stock':>8} {'Price':>10} Level"
        )
        click.echo("-" * 96)
        for p in result.products:
            click.echo(
                f"{p.id:<34} {p.name:<20} {p.category:<12} "
                f"{p.stock:>8} {p.sell_price:>10} {p.stock_level}"
            )

    totals = result.totals
    click.echo()
    click.echo(
        f"{totals.items} products, {totals.stock_total} units in stock, "
        f"{totals.low} running low"
    )


@click.command("categories")
@click.pass_obj
def product_categories(settings: Settings) -> None:
    """List the distinct product categories."""
    handler = ListProductsHandler(product_store=product_store(settings))

    try:
        result = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for name in result.categories:
        click.echo(name)
