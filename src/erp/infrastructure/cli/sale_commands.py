"""CLI commands for the Sale aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from erp.application.dto import SaleDTO
from erp.application.list_sales import ListSalesHandler
from erp.application.place_order import PlaceOrderHandler
from erp.application.update_sale_status import UpdateSaleStatusHandler
from erp.domain.exceptions import DomainException, InsufficientStock
from erp.domain.model.sale import SaleStatus
from erp.infrastructure.bootstrap import sale_repository, settle_sale_handler
from erp.infrastructure.cli.options import DATE, end_of, start_of


def _display_sale(dto: SaleDTO) -> None:
    click.echo(f"Sale #{dto.id}  (status={dto.status})")
    click.echo(f"Product:  {dto.product_name} (#{dto.product_id})")
    if dto.customer_name:
        click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Sold:     {dto.sold_at}")
    click.echo()
    click.echo(f"  {'Qty':>5} {'Price':>10} {'Total':>12} {'Unit cost':>10} {'COGS':>12}")
    click.echo(f"  {'-'*53}")
    click.echo(
        f"  {dto.quantity:>5} {dto.unit_price:>10} {dto.total_price:>12} "
        f"{dto.unit_cost:>10} {dto.total_cost:>12}"
    )


def _stock_error(exc: InsufficientStock) -> click.ClickException:
    return click.ClickException(
        f"Only {exc.available} units available (requested {exc.requested})"
    )


@click.command("settle")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
def sale_settle(product_id: str, quantity: int) -> None:
    """Record an internal (counter) sale at the current list price."""
    handler = settle_sale_handler()

    try:
        dto = handler.handle(product_id, quantity)
    except InsufficientStock as exc:
        raise _stock_error(exc)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("order")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units ordered.")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
def sale_order(product_id: str, quantity: int, name: str, email: str) -> None:
    """Place a client order."""
    handler = PlaceOrderHandler(settle_sale_handler())

    try:
        dto = handler.handle(product_id, quantity, customer_name=name, customer_email=email)
    except InsufficientStock as exc:
        raise _stock_error(exc)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed for {dto.customer_name}: total {dto.total_price}")


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(["all"] + [s.value for s in SaleStatus]),
    default="all",
    show_default=True,
)
@click.option("--from", "start", type=DATE, default=None, help="First day (YYYY-MM-DD).")
@click.option("--to", "end", type=DATE, default=None, help="Last day (YYYY-MM-DD).")
@click.option("--email", default=None, help="Only this customer's purchases.")
@click.option("--clients", is_flag=True, default=False, help="Only client purchases.")
@click.option("--limit", type=int, default=None, help="Show at most this many sales.")
def sale_list(
    status: str,
    start: datetime | None,
    end: datetime | None,
    email: str | None,
    clients: bool,
    limit: int | None,
) -> None:
    """List sales, newest first."""
    handler = ListSalesHandler(sale_repo=sale_repository())

    try:
        sales = handler.handle(
            status=status,
            start=start_of(start),
            end=end_of(end),
            email=email,
            customers_only=clients,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(
        f"{'ID':<5} {'Date':<20} {'Product':<20} {'Qty':>5} {'Total':>12} {'Status':<10}"
    )
    click.echo("-" * 77)
    for s in sales:
        click.echo(
            f"{s.id:<5} {s.sold_at:<20} {s.product_name:<20} {s.quantity:>5} "
            f"{s.total_price:>12} {s.status:<10}"
        )


@click.command("status")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
@click.option(
    "--set",
    "status",
    required=True,
    type=click.Choice([s.value for s in SaleStatus]),
    help="New status.",
)
@click.option("--reason", default=None, help="Reason (recorded on cancellation).")
def sale_status(sale_id: int, status: str, reason: str | None) -> None:
    """Change the status of a recorded sale."""
    handler = UpdateSaleStatusHandler(sale_repo=sale_repository())

    try:
        handler.handle(sale_id, status, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale_id} is now {status}.")
