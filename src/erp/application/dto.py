"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money is rendered for
display ("$15.00", "€15.00"); amounts and average unit costs are rounded
half up to cents here and nowhere earlier.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from erp.domain.model.financials import FinancialSummary, IncomeStatement
from erp.domain.model.product import Product
from erp.domain.model.sale import Sale
from erp.domain.model.value_objects import Money, round_cents

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


def _amount(value: Decimal) -> str:
    return str(round_cents(value))


@dataclass(frozen=True)
class SaleDTO:
    """Output: a recorded sale as displayed to the user."""

    id: int
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    unit_cost: str  # average FIFO cost, rounded for display
    total_price: str
    total_cost: str
    status: str
    sold_at: str
    customer_name: str | None = None
    customer_email: str | None = None
    rejection_reason: str | None = None

    @staticmethod
    def from_sale(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            product_id=sale.product_id,
            product_name=sale.product_name,
            quantity=sale.quantity.value,
            unit_price=str(sale.unit_price),
            unit_cost=str(Money(sale.unit_cost, sale.total_cost.currency)),
            total_price=str(sale.total_price),
            total_cost=str(sale.total_cost),
            status=sale.status.value,
            sold_at=sale.sold_at.strftime(_TIMESTAMP),
            customer_name=sale.customer_name,
            customer_email=sale.customer_email,
            rejection_reason=sale.rejection_reason,
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str | None
    price: str
    quantity: int
    lot_count: int
    is_active: bool

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            quantity=product.quantity,
            lot_count=len(product.lots),
            is_active=product.is_active,
        )


@dataclass(frozen=True)
class FinancialSummaryDTO:
    """Output: summary figures as exact decimal strings (two places)."""

    revenue: str
    cost_of_goods_sold: str
    gross_profit: str
    operating_expenses: str
    net_profit: str
    product_purchases: str
    other_expenses: str
    total_purchase_costs: str

    @staticmethod
    def from_summary(summary: FinancialSummary) -> FinancialSummaryDTO:
        breakdown = summary.expense_breakdown
        return FinancialSummaryDTO(
            revenue=_amount(summary.revenue),
            cost_of_goods_sold=_amount(summary.cost_of_goods_sold),
            gross_profit=_amount(summary.gross_profit),
            operating_expenses=_amount(summary.operating_expenses),
            net_profit=_amount(summary.net_profit),
            product_purchases=_amount(breakdown.product_purchases),
            other_expenses=_amount(breakdown.other_expenses),
            total_purchase_costs=_amount(breakdown.total_purchase_costs),
        )


@dataclass(frozen=True)
class IncomeStatementDTO:
    month: str
    total_revenue: str
    cost_of_goods_sold: str
    gross_profit: str
    operating_expenses: str
    net_profit: str
    updated_at: str

    @staticmethod
    def from_statement(statement: IncomeStatement) -> IncomeStatementDTO:
        return IncomeStatementDTO(
            month=statement.month,
            total_revenue=_amount(statement.total_revenue),
            cost_of_goods_sold=_amount(statement.cost_of_goods_sold),
            gross_profit=_amount(statement.gross_profit),
            operating_expenses=_amount(statement.operating_expenses),
            net_profit=_amount(statement.net_profit),
            updated_at=statement.updated_at.strftime(_TIMESTAMP),
        )
