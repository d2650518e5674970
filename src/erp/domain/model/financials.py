"""Derived financial figures.

Profits can be negative, so these hold plain Decimals rather than Money.
None of these objects is a source of truth: each one is recomputed from
sales, purchase lots and expenses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

_ZERO = Decimal("0")


@dataclass(frozen=True)
class ExpenseBreakdown:
    product_purchases: Decimal = _ZERO  # incidental lot expenses
    other_expenses: Decimal = _ZERO  # standalone Expense records
    total_purchase_costs: Decimal = _ZERO  # lot.unit_cost * lot.quantity


@dataclass(frozen=True)
class FinancialSummary:
    """Revenue/COGS/profit rollup over an inclusive time window.

    ``period_start``/``period_end`` of None mean the window is open on
    that side.
    """

    period_start: datetime | None
    period_end: datetime | None
    revenue: Decimal
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal
    expense_breakdown: ExpenseBreakdown


@dataclass(frozen=True)
class MonthlySales:
    month: str  # "YYYY-MM"
    total_sales: Decimal
    total_cost: Decimal

    @property
    def gross_profit(self) -> Decimal:
        return self.total_sales - self.total_cost


@dataclass
class IncomeStatement:
    """A persisted snapshot of one month's summary.

    Only regenerated on explicit request; live summaries never read it.
    """

    month: str  # "YYYY-MM"
    year: int
    total_revenue: Decimal
    cost_of_goods_sold: Decimal
    operating_expenses: Decimal
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def gross_profit(self) -> Decimal:
        return self.total_revenue - self.cost_of_goods_sold

    @property
    def net_profit(self) -> Decimal:
        return self.gross_profit - self.operating_expenses

    @staticmethod
    def from_summary(
        year: int, month: int, summary: FinancialSummary, now: datetime
    ) -> IncomeStatement:
        return IncomeStatement(
            month=month_key(year, month),
            year=year,
            total_revenue=summary.revenue,
            cost_of_goods_sold=summary.cost_of_goods_sold,
            operating_expenses=summary.operating_expenses,
            created_at=now,
            updated_at=now,
        )

    def refresh(self, summary: FinancialSummary, now: datetime) -> None:
        self.total_revenue = summary.revenue
        self.cost_of_goods_sold = summary.cost_of_goods_sold
        self.operating_expenses = summary.operating_expenses
        self.updated_at = now


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"
