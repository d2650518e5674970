import click

from erp.infrastructure.cli.finance_commands import (
    expense_add,
    expense_list,
    finance_generate,
    finance_monthly,
    finance_statement,
    finance_summary,
)
from erp.infrastructure.cli.inventory_commands import inventory_check, inventory_show
from erp.infrastructure.cli.product_commands import (
    product_delete,
    product_list,
    product_purchase,
    product_update,
)
from erp.infrastructure.cli.query_commands import (
    query_list,
    query_respond,
    query_stats,
    query_submit,
)
from erp.infrastructure.cli.sale_commands import (
    sale_list,
    sale_order,
    sale_settle,
    sale_status,
)
from erp.infrastructure.logger_config import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override ERP_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """ERP: inventory, sales, client queries and financial reporting"""
    setup_logging(log_level)


@cli.group()
def product() -> None:
    """Manage products and stock purchases."""


@cli.group()
def sale() -> None:
    """Record and manage sales."""


@cli.group()
def inventory() -> None:
    """Inspect inventory."""


@cli.group()
def expense() -> None:
    """Manage operating expenses."""


@cli.group()
def finance() -> None:
    """Financial reports."""


@cli.group()
def query() -> None:
    """Handle client queries."""


# Register subcommands
product.add_command(product_purchase)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_delete)
sale.add_command(sale_settle)
sale.add_command(sale_order)
sale.add_command(sale_list)
sale.add_command(sale_status)
inventory.add_command(inventory_show)
inventory.add_command(inventory_check)
expense.add_command(expense_add)
expense.add_command(expense_list)
finance.add_command(finance_summary)
finance.add_command(finance_generate)
finance.add_command(finance_statement)
finance.add_command(finance_monthly)
query.add_command(query_submit)
query.add_command(query_list)
query.add_command(query_respond)
query.add_command(query_stats)
