"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from erp.application.delete_product import DeleteProductHandler
from erp.application.record_purchase import RecordPurchaseHandler
from erp.application.update_product import UpdateProductHandler
from erp.domain.exceptions import DomainException
from erp.infrastructure.bootstrap import product_repository
from erp.infrastructure.settings import settings


@click.command("purchase")
@click.option("--id", "product_id", default=None, help="Existing product ID to restock.")
@click.option("--name", default=None, help="Name for a new product.")
@click.option("--description", default=None, help="Description for a new product.")
@click.option("--price", default=None, help="List price (required for a new product).")
@click.option("--quantity", required=True, type=int, help="Units bought.")
@click.option("--unit-cost", required=True, help="Cost per unit (e.g. 4.00).")
@click.option("--expenses", default="0", show_default=True, help="Incidental purchase expenses.")
@click.option("--supplier", default=None, help="Supplier name.")
def product_purchase(
    product_id: str | None,
    name: str | None,
    description: str | None,
    price: str | None,
    quantity: int,
    unit_cost: str,
    expenses: str,
    supplier: str | None,
) -> None:
    """Record a stock purchase (new lot), registering the product if needed."""
    handler = RecordPurchaseHandler(
        product_repo=product_repository(), currency=settings.CURRENCY
    )

    try:
        dto = handler.handle(
            quantity=quantity,
            unit_cost=unit_cost,
            expenses=expenses,
            supplier=supplier,
            product_id=product_id,
            name=name,
            description=description,
            price=price,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Purchase recorded for product #{dto.id} '{dto.name}': "
        f"{quantity} units, {dto.quantity} now on hand"
    )


@click.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include deleted products.")
def product_list(show_all: bool) -> None:
    """List products in the catalog."""
    repo = product_repository()
    products = [p for p in repo.list_all() if show_all or p.is_active]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'On hand':>8}")
    click.echo("-" * 47)
    for p in products:
        suffix = "" if p.is_active else "  (deleted)"
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.quantity:>8}{suffix}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
def product_update(
    product_id: str, name: str | None, description: str | None, price: str | None
) -> None:
    """Update a product's name, description or price."""
    handler = UpdateProductHandler(
        product_repo=product_repository(), currency=settings.CURRENCY
    )

    try:
        dto = handler.handle(
            product_id=product_id, name=name, description=description, price=price
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated: '{dto.name}' at {dto.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog (sales history is kept)."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
