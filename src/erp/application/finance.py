"""Application services: financial reporting use cases (queries).

Live summaries are always recomputed from sales, purchase lots and
expenses.  Income statements are month snapshots that are written only
when explicitly generated.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from erp.application.dto import FinancialSummaryDTO, IncomeStatementDTO
from erp.application.periods import month_window, period_window
from erp.domain.exceptions import EntityNotFoundError, ValidationError
from erp.domain.model.financials import IncomeStatement, MonthlySales, month_key
from erp.domain.repository.expense_repository import ExpenseRepository
from erp.domain.repository.income_statement_repository import (
    IncomeStatementRepository,
)
from erp.domain.repository.product_repository import ProductRepository
from erp.domain.repository.sale_repository import SaleRepository
from erp.domain.service.financial_aggregator import FinancialAggregator

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FinanceSummaryHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        product_repo: ProductRepository,
        expense_repo: ExpenseRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sale_repo = sale_repo
        self._product_repo = product_repo
        self._expense_repo = expense_repo
        self._clock = clock
        self._aggregator = FinancialAggregator()

    def handle(
        self,
        period: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> FinancialSummaryDTO:
        """Summarize a period keyword or an explicit window, not both."""
        if period is not None and (start is not None or end is not None):
            raise ValidationError("Give either a period or explicit dates, not both")
        if period is not None:
            start, end = period_window(period, self._clock())
        if start is not None and end is not None and start > end:
            raise ValidationError("Window start must not be after its end")

        summary = self._aggregator.summarize(
            sales=self._sale_repo.list_all(),
            products=self._product_repo.list_all(),
            expenses=self._expense_repo.list_all(),
            period_start=start,
            period_end=end,
        )
        return FinancialSummaryDTO.from_summary(summary)


class GenerateIncomeStatementHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        product_repo: ProductRepository,
        expense_repo: ExpenseRepository,
        statement_repo: IncomeStatementRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sale_repo = sale_repo
        self._product_repo = product_repo
        self._expense_repo = expense_repo
        self._statement_repo = statement_repo
        self._clock = clock
        self._aggregator = FinancialAggregator()

    def handle(self, year: int, month: int) -> IncomeStatementDTO:
        """Compute the month's figures and upsert its snapshot."""
        start, end = month_window(year, month, timezone.utc)
        summary = self._aggregator.summarize(
            sales=self._sale_repo.list_all(),
            products=self._product_repo.list_all(),
            expenses=self._expense_repo.list_all(),
            period_start=start,
            period_end=end,
        )

        now = self._clock()
        statement = self._statement_repo.get_by_month(month_key(year, month))
        if statement is None:
            statement = IncomeStatement.from_summary(year, month, summary, now)
        else:
            statement.refresh(summary, now)
        self._statement_repo.save(statement)

        logger.info(
            "Income statement %s generated: net profit %s",
            statement.month, statement.net_profit,
        )
        return IncomeStatementDTO.from_statement(statement)


class ShowIncomeStatementHandler:

    def __init__(self, statement_repo: IncomeStatementRepository) -> None:
        self._statement_repo = statement_repo

    def handle(self, month: str) -> IncomeStatementDTO:
        statement = self._statement_repo.get_by_month(month)
        if statement is None:
            raise EntityNotFoundError(f"Income statement for {month} not found")
        return IncomeStatementDTO.from_statement(statement)


class MonthlySalesHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self) -> list[MonthlySales]:
        return FinancialAggregator().monthly_sales(self._sale_repo.list_all())
