"""Domain service: financial rollups over sales, purchase lots and expenses.

Every function here is pure: it reads the records it is handed and
returns new value objects.  Nothing is cached and nothing is mutated, so
calling ``summarize`` twice over the same records gives equal results.

COGS is taken from the cost recorded on each Sale when it was settled.
It is never recomputed from the lots, whose remaining quantities keep
changing after the sale.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from erp.domain.model.expense import Expense
from erp.domain.model.financials import (
    ExpenseBreakdown,
    FinancialSummary,
    MonthlySales,
    month_key,
)
from erp.domain.model.product import Product
from erp.domain.model.sale import Sale

_ZERO = Decimal("0")


def _in_window(
    moment: datetime, start: datetime | None, end: datetime | None
) -> bool:
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


class FinancialAggregator:

    def summarize(
        self,
        sales: Iterable[Sale],
        products: Iterable[Product],
        expenses: Iterable[Expense],
        period_start: datetime | None = None,
        period_end: datetime | None = None,
    ) -> FinancialSummary:
        """Roll up one window; both bounds inclusive, None means unbounded."""
        revenue = _ZERO
        cogs = _ZERO
        for sale in sales:
            if not sale.is_completed:
                continue
            if not _in_window(sale.sold_at, period_start, period_end):
                continue
            revenue += sale.total_price.amount
            cogs += sale.cost_of_goods.amount

        lot_expenses = _ZERO
        purchase_costs = _ZERO
        for product in products:
            for lot in product.lots:
                if _in_window(lot.purchased_at, period_start, period_end):
                    lot_expenses += lot.expenses.amount
                    purchase_costs += lot.purchase_cost.amount

        other = sum(
            (
                e.amount.amount
                for e in expenses
                if _in_window(e.spent_at, period_start, period_end)
            ),
            _ZERO,
        )

        gross = revenue - cogs
        operating = lot_expenses + other
        return FinancialSummary(
            period_start=period_start,
            period_end=period_end,
            revenue=revenue,
            cost_of_goods_sold=cogs,
            gross_profit=gross,
            operating_expenses=operating,
            net_profit=gross - operating,
            expense_breakdown=ExpenseBreakdown(
                product_purchases=lot_expenses,
                other_expenses=other,
                total_purchase_costs=purchase_costs,
            ),
        )

    def monthly_sales(self, sales: Iterable[Sale]) -> list[MonthlySales]:
        """Completed sales bucketed by calendar month, oldest month first."""
        totals: dict[str, list[Decimal]] = defaultdict(lambda: [_ZERO, _ZERO])
        for sale in sales:
            if not sale.is_completed:
                continue
            key = month_key(sale.sold_at.year, sale.sold_at.month)
            bucket = totals[key]
            bucket[0] += sale.total_price.amount
            bucket[1] += sale.cost_of_goods.amount
        return [
            MonthlySales(month=key, total_sales=sold, total_cost=cost)
            for key, (sold, cost) in sorted(totals.items())
        ]
