from __future__ import annotations

from pathlib import Path

import click

from stockroom.infrastructure.cli.product_commands import (
    product_add,
    product_adjust,
    product_categories,
    product_delete,
    product_list,
    product_update,
)
from stockroom.infrastructure.cli.report_commands import (
    report_low_stock,
    report_stats,
    report_top,
)
from stockroom.infrastructure.cli.sale_commands import sale_list, sale_record
from stockroom.infrastructure.config import load_settings
from stockroom.infrastructure.logging_config import add_context, configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="STOCKROOM_DATA_DIR",
    default=None,
    help="Directory holding products.json and sales.json.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Stockroom: point-of-sale and inventory tracker"""
    try:
        settings = load_settings(data_dir)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    configure_logging(settings)
    add_context(command=ctx.invoked_subcommand, data_dir=str(settings.data_dir))
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def sale() -> None:
    """Record and list sales."""


@cli.group()
def report() -> None:
    """Sales and stock reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_adjust)
product.add_command(product_categories)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
sale.add_command(sale_list)
sale.add_command(sale_record)
report.add_command(report_low_stock)
report.add_command(report_stats)
report.add_command(report_top)
