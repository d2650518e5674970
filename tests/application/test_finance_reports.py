"""Integration tests for the financial reporting use cases."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from erp.application.expenses import ListExpensesHandler, RecordExpenseHandler
from erp.application.finance import (
    FinanceSummaryHandler,
    GenerateIncomeStatementHandler,
    MonthlySalesHandler,
    ShowIncomeStatementHandler,
)
from erp.application.periods import month_window, period_window
from erp.domain.exceptions import EntityNotFoundError, ValidationError
from erp.domain.model.expense import Expense
from erp.domain.model.product import Product, PurchaseLot
from erp.domain.model.sale import Sale
from erp.domain.model.value_objects import Money, Quantity
from tests.fakes import (
    FakeExpenseRepository,
    FakeIncomeStatementRepository,
    FakeProductRepository,
    FakeSaleRepository,
)

UTC = timezone.utc
# A Wednesday
NOW = datetime(2024, 1, 17, 15, 0, tzinfo=UTC)


def _sale(price: str, qty: int, cost: str, when: datetime) -> Sale:
    return Sale(
        id=None,
        product_id="1",
        product_name="Widget",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        total_cost=Money.of(cost),
        sold_at=when,
    )


def _repos():
    product = Product.register("1", "Widget", Money.of("50.00"))
    product.receive_lot(PurchaseLot.create(
        10, Money.of("20.00"), expenses=Money.of("5.00"),
        purchased_at=datetime(2024, 1, 2, tzinfo=UTC),
    ))
    sales = FakeSaleRepository([
        _sale("50.00", 2, "60.00", datetime(2024, 1, 5, tzinfo=UTC)),
        _sale("25.00", 2, "20.00", datetime(2024, 1, 17, 9, 0, tzinfo=UTC)),
        _sale("10.00", 1, "3.00", datetime(2024, 2, 1, tzinfo=UTC)),
    ])
    expenses = FakeExpenseRepository([
        Expense.record("Rent", Money.of("10.00"), datetime(2024, 1, 15, tzinfo=UTC)),
    ])
    return sales, FakeProductRepository([product]), expenses


class TestPeriods:

    def test_daily(self):
        start, end = period_window("daily", NOW)
        assert start == datetime(2024, 1, 17, tzinfo=UTC)
        assert end == datetime(2024, 1, 17, 23, 59, 59, 999999, tzinfo=UTC)

    def test_weekly_runs_sunday_to_saturday(self):
        start, end = period_window("weekly", NOW)
        assert start == datetime(2024, 1, 14, tzinfo=UTC)
        assert end.date() == datetime(2024, 1, 20).date()

    def test_weekly_on_a_sunday_starts_that_day(self):
        start, _ = period_window("weekly", datetime(2024, 1, 14, 8, 0, tzinfo=UTC))
        assert start == datetime(2024, 1, 14, tzinfo=UTC)

    def test_monthly_handles_leap_february(self):
        start, end = period_window("monthly", datetime(2024, 2, 10, tzinfo=UTC))
        assert start == datetime(2024, 2, 1, tzinfo=UTC)
        assert end.day == 29

    def test_yearly(self):
        start, end = period_window("yearly", NOW)
        assert start == datetime(2024, 1, 1, tzinfo=UTC)
        assert (end.month, end.day) == (12, 31)

    def test_all_is_unbounded(self):
        assert period_window("all", NOW) == (None, None)
        assert period_window(None, NOW) == (None, None)

    def test_unknown_period(self):
        with pytest.raises(ValidationError, match="Unknown period"):
            period_window("hourly", NOW)

    def test_bad_month(self):
        with pytest.raises(ValidationError):
            month_window(2024, 13)


class TestFinanceSummary:

    def _handler(self):
        sales, products, expenses = _repos()
        return FinanceSummaryHandler(sales, products, expenses, clock=lambda: NOW)

    def test_monthly_summary(self):
        dto = self._handler().handle(period="monthly")
        assert dto.revenue == "150.00"
        assert dto.cost_of_goods_sold == "80.00"
        assert dto.gross_profit == "70.00"
        assert dto.operating_expenses == "15.00"
        assert dto.net_profit == "55.00"
        assert dto.product_purchases == "5.00"
        assert dto.other_expenses == "10.00"
        assert dto.total_purchase_costs == "200.00"

    def test_daily_summary(self):
        dto = self._handler().handle(period="daily")
        assert dto.revenue == "50.00"
        assert dto.operating_expenses == "0.00"

    def test_explicit_window(self):
        dto = self._handler().handle(
            start=datetime(2024, 2, 1, tzinfo=UTC),
            end=datetime(2024, 2, 29, 23, 59, tzinfo=UTC),
        )
        assert dto.revenue == "10.00"
        assert dto.net_profit == "7.00"

    def test_all_time(self):
        dto = self._handler().handle()
        assert dto.revenue == "160.00"

    def test_negative_profit_is_reported(self):
        sales, products, _ = _repos()
        expenses = FakeExpenseRepository([
            Expense.record("Rent", Money.of("500.00"), datetime(2024, 1, 3, tzinfo=UTC)),
        ])
        dto = FinanceSummaryHandler(sales, products, expenses, clock=lambda: NOW).handle(
            period="monthly"
        )
        assert dto.net_profit == "-435.00"

    def test_period_and_dates_are_exclusive(self):
        with pytest.raises(ValidationError, match="not both"):
            self._handler().handle(period="daily", start=NOW)

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError):
            self._handler().handle(start=NOW, end=datetime(2024, 1, 1, tzinfo=UTC))

    def test_summary_does_not_mutate_records(self):
        handler = self._handler()
        assert handler.handle(period="yearly") == handler.handle(period="yearly")


class TestIncomeStatements:

    def _handlers(self, clock):
        sales, products, expenses = _repos()
        statements = FakeIncomeStatementRepository()
        generate = GenerateIncomeStatementHandler(
            sales, products, expenses, statements, clock=clock
        )
        return generate, ShowIncomeStatementHandler(statements), expenses

    def test_generate_and_show(self):
        generate, show, _ = self._handlers(lambda: NOW)
        generated = generate.handle(2024, 1)
        assert generated.month == "2024-01"
        assert generated.total_revenue == "150.00"
        assert generated.net_profit == "55.00"
        assert show.handle("2024-01") == generated

    def test_regenerate_refreshes_snapshot(self):
        moments = iter([NOW, datetime(2024, 2, 2, tzinfo=UTC)])
        generate, show, expenses = self._handlers(lambda: next(moments))
        generate.handle(2024, 1)
        expenses.save(
            Expense.record("Wages", Money.of("5.00"), datetime(2024, 1, 20, tzinfo=UTC))
        )
        regenerated = generate.handle(2024, 1)

        assert regenerated.operating_expenses == "20.00"
        assert regenerated.updated_at.startswith("2024-02-02")
        assert show.handle("2024-01").net_profit == "50.00"

    def test_missing_statement(self):
        _, show, _ = self._handlers(lambda: NOW)
        with pytest.raises(EntityNotFoundError):
            show.handle("2023-12")

    def test_invalid_month(self):
        generate, _, _ = self._handlers(lambda: NOW)
        with pytest.raises(ValidationError):
            generate.handle(2024, 0)


class TestMonthlySalesAndExpenses:

    def test_monthly_sales(self):
        sales, _, _ = _repos()
        months = MonthlySalesHandler(sales).handle()
        assert [m.month for m in months] == ["2024-01", "2024-02"]
        assert months[0].total_sales == Decimal("150.00")
        assert months[0].gross_profit == Decimal("70.00")

    def test_record_and_list_expenses(self):
        repo = FakeExpenseRepository()
        moments = iter([
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 1, 2, tzinfo=UTC),
        ])
        record = RecordExpenseHandler(repo, clock=lambda: next(moments))
        record.handle("Rent", "100.00")
        dto = record.handle("Utilities", "25.50", description="Power")

        assert dto.id == 2
        assert dto.amount == "$25.50"
        listed = ListExpensesHandler(repo).handle()
        assert [e.category for e in listed] == ["Utilities", "Rent"]

    def test_zero_expense_rejected(self):
        with pytest.raises(ValidationError):
            RecordExpenseHandler(FakeExpenseRepository()).handle("Rent", "0")
