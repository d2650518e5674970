"""CLI commands for inventory inspection."""

from __future__ import annotations

import click

from erp.application.show_inventory import (
    CheckInventoryIntegrityHandler,
    ShowInventoryHandler,
)
from erp.infrastructure.bootstrap import product_repository


@click.command("show")
@click.option("--in-stock", is_flag=True, default=False, help="Hide sold-out products.")
def inventory_show(in_stock: bool) -> None:
    """Show current stock levels, lowest first."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle(in_stock_only=in_stock)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'Product':<20} {'Price':>10} {'On hand':>8} {'In lots':>8} {'Lots':>5}")
    click.echo("-" * 55)
    for line in lines:
        flag = "" if line.consistent else "  MISMATCH"
        click.echo(
            f"{line.product_name:<20} {line.price:>10} {line.on_hand:>8} "
            f"{line.in_lots:>8} {line.open_lots:>5}{flag}"
        )


@click.command("check")
def inventory_check() -> None:
    """Verify every product's on-hand quantity against its purchase lots."""
    handler = CheckInventoryIntegrityHandler(product_repo=product_repository())
    anomalies = handler.handle()

    if not anomalies:
        click.echo("All products consistent.")
        return

    for report in anomalies:
        click.echo(
            f"#{report.product_id} {report.product_name}: on hand "
            f"{report.cached_quantity}, lots hold {report.lot_quantity}"
        )
    raise click.ClickException(f"{len(anomalies)} product(s) out of sync")
