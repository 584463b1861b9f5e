"""CLI commands for the sales and stock reports."""

from __future__ import annotations

import click

from stockroom.application.show_report import ShowReportHandler
from stockroom.domain.exceptions import DomainException
from stockroom.domain.service.aggregation import WindowStats
from stockroom.infrastructure.bootstrap import aggregation_engine
from stockroom.infrastructure.config import Settings


def _stats_line(label: str, stats: WindowStats) -> str:
    return (
        f"{label:<12} revenue {stats.total_revenue:>12}  "
        f"profit {stats.total_profit:>12}  items {stats.total_items:>6}"
    )


@click.command("stats")
@click.pass_obj
def report_stats(settings: Settings) -> None:
    """Revenue, profit and units for today, this week and this month."""
    handler = ShowReportHandler(engine=aggregation_engine(settings))

    try:
        report = handler.sales()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_stats_line("Today", report.today))
    click.echo(_stats_line("This week", report.week))
    click.echo(_stats_line("This month", report.month))


@click.command("top")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="How many products.",
)
@click.pass_obj
def report_top(settings: Settings, limit: int) -> None:
    """Best-selling products by units sold."""
    handler = ShowReportHandler(engine=aggregation_engine(settings))

    try:
        ranking = handler.top(limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not ranking:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'#':>3} {'Product':<20} {'Qty':>8} {'Revenue':>14}")
    click.echo("-" * 48)
    for rank, row in enumerate(ranking, start=1):
        click.echo(f"{rank:>3} {row.product_name:<20} {row.quantity:>8} {row.revenue:>14}")


@click.command("low-stock")
@click.pass_obj
def report_low_stock(settings: Settings) -> None:
    """Products at or below their low-stock limit, critical first."""
    handler = ShowReportHandler(engine=aggregation_engine(settings))

    try:
        products = handler.low_stock()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("All products are sufficiently stocked.")
        return

    click.echo(f"{'Product':<20} {'Stock':>8} {'Limit':>6} Level")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.name:<20} {p.stock:>8} {p.low_stock_limit:>6} {p.stock_level}")
