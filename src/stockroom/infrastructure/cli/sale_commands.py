"""CLI commands for the sale ledger."""

from __future__ import annotations

import click

from stockroom.application.list_sales import ListSalesHandler
from stockroom.application.record_sale import RecordSaleHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import inventory_engine, sale_ledger
from stockroom.infrastructure.config import Settings


@click.command("record")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
@click.pass_obj
def sale_record(settings: Settings, product_id: str, quantity: int) -> None:
    """Sell units of a product and take them out of stock."""
    handler = RecordSaleHandler(engine=inventory_engine(settings))

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.id} recorded")
    click.echo(f"  {dto.quantity} {dto.unit} x {dto.sell_price} = {dto.total}")
    click.echo(f"  Profit: {dto.profit}")


@click.command("list")
@click.option("--limit", type=int, default=None, help="Show only the N latest sales.")
@click.pass_obj
def sale_list(settings: Settings, limit: int | None) -> None:
    """List sales, newest first."""
    handler = ListSalesHandler(sale_ledger=sale_ledger(settings))

    try:
        sales = handler.handle(limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'Time':<26} {'Product':<20} {'Qty':>6} {'Total':>12} {'Profit':>12}")
    click.echo("-" * 80)
    for s in sales:
        click.echo(
            f"{s.timestamp:<26} {s.product_name:<20} {s.quantity:>6} "
            f"{s.total:>12} {s.profit:>12}"
        )
