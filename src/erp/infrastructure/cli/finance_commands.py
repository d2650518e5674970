"""CLI commands for expenses and financial reporting."""

from __future__ import annotations

from datetime import datetime

import click

from erp.application.expenses import ListExpensesHandler, RecordExpenseHandler
from erp.application.finance import (
    FinanceSummaryHandler,
    GenerateIncomeStatementHandler,
    MonthlySalesHandler,
    ShowIncomeStatementHandler,
)
from erp.application.periods import PERIODS
from erp.domain.exceptions import DomainException
from erp.infrastructure.bootstrap import (
    expense_repository,
    income_statement_repository,
    product_repository,
    sale_repository,
)
from erp.infrastructure.cli.options import DATE, end_of, start_of
from erp.infrastructure.settings import settings


@click.command("add")
@click.option("--category", required=True, help="Expense category (e.g. rent).")
@click.option("--amount", required=True, help="Amount (e.g. 120.00).")
@click.option("--description", default=None, help="Free-text description.")
def expense_add(category: str, amount: str, description: str | None) -> None:
    """Record a standalone operating expense."""
    handler = RecordExpenseHandler(
        expense_repo=expense_repository(), currency=settings.CURRENCY
    )

    try:
        dto = handler.handle(category=category, amount=amount, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expense #{dto.id} recorded: {dto.category} {dto.amount}")


@click.command("list")
def expense_list() -> None:
    """List expenses, newest first."""
    expenses = ListExpensesHandler(expense_repo=expense_repository()).handle()

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"{'ID':<5} {'Date':<20} {'Category':<15} {'Amount':>12}")
    click.echo("-" * 55)
    for e in expenses:
        click.echo(f"{e.id:<5} {e.spent_at:<20} {e.category:<15} {e.amount:>12}")


@click.command("summary")
@click.option("--period", type=click.Choice(PERIODS), default=None, help="Reporting period.")
@click.option("--from", "start", type=DATE, default=None, help="First day (YYYY-MM-DD).")
@click.option("--to", "end", type=DATE, default=None, help="Last day (YYYY-MM-DD).")
def finance_summary(period: str | None, start: datetime | None, end: datetime | None) -> None:
    """Revenue, COGS and profit, recomputed from the records."""
    handler = FinanceSummaryHandler(
        sale_repo=sale_repository(),
        product_repo=product_repository(),
        expense_repo=expense_repository(),
    )

    try:
        dto = handler.handle(period=period, start=start_of(start), end=end_of(end))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    rows = [
        ("Revenue", dto.revenue),
        ("Cost of goods sold", dto.cost_of_goods_sold),
        ("Gross profit", dto.gross_profit),
        ("Operating expenses", dto.operating_expenses),
        ("  purchase expenses", dto.product_purchases),
        ("  other expenses", dto.other_expenses),
        ("Net profit", dto.net_profit),
        ("Purchase costs", dto.total_purchase_costs),
    ]
    for label, value in rows:
        click.echo(f"{label:<22} {value:>14}")


@click.command("generate")
@click.option("--year", required=True, type=int)
@click.option("--month", required=True, type=click.IntRange(1, 12))
def finance_generate(year: int, month: int) -> None:
    """Generate (or regenerate) the income statement for a month."""
    handler = GenerateIncomeStatementHandler(
        sale_repo=sale_repository(),
        product_repo=product_repository(),
        expense_repo=expense_repository(),
        statement_repo=income_statement_repository(),
    )

    try:
        dto = handler.handle(year=year, month=month)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Income statement {dto.month} generated: net profit {dto.net_profit}")


@click.command("statement")
@click.option("--month", required=True, help="Month as YYYY-MM.")
def finance_statement(month: str) -> None:
    """Show a previously generated income statement."""
    handler = ShowIncomeStatementHandler(statement_repo=income_statement_repository())

    try:
        dto = handler.handle(month)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Income statement {dto.month}  (updated {dto.updated_at})")
    click.echo(f"{'Revenue':<22} {dto.total_revenue:>14}")
    click.echo(f"{'Cost of goods sold':<22} {dto.cost_of_goods_sold:>14}")
    click.echo(f"{'Gross profit':<22} {dto.gross_profit:>14}")
    click.echo(f"{'Operating expenses':<22} {dto.operating_expenses:>14}")
    click.echo(f"{'Net profit':<22} {dto.net_profit:>14}")


@click.command("monthly")
def finance_monthly() -> None:
    """Completed sales and gross profit per month."""
    months = MonthlySalesHandler(sale_repo=sale_repository()).handle()

    if not months:
        click.echo("No completed sales.")
        return

    click.echo(f"{'Month':<8} {'Sales':>14} {'Cost':>14} {'Gross profit':>14}")
    click.echo("-" * 53)
    for m in months:
        click.echo(
            f"{m.month:<8} {m.total_sales:>14.2f} {m.total_cost:>14.2f} {m.gross_profit:>14.2f}"
        )
