"""Application services: Record Expense and List Expenses use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from erp.domain.model.expense import Expense
from erp.domain.model.value_objects import Money
from erp.domain.repository.expense_repository import ExpenseRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ExpenseDTO:
    id: int
    category: str
    amount: str
    spent_at: str
    description: str | None


def _to_dto(expense: Expense) -> ExpenseDTO:
    return ExpenseDTO(
        id=expense.id,  # type: ignore[arg-type]
        category=expense.category,
        amount=str(expense.amount),
        spent_at=expense.spent_at.strftime("%Y-%m-%d %H:%M UTC"),
        description=expense.description,
    )


class RecordExpenseHandler:

    def __init__(
        self,
        expense_repo: ExpenseRepository,
        clock: Callable[[], datetime] = _utcnow,
        currency: str = "USD",
    ) -> None:
        self._expense_repo = expense_repo
        self._clock = clock
        self._currency = currency

    def handle(
        self, category: str, amount: str, description: str | None = None
    ) -> ExpenseDTO:
        expense = Expense.record(
            category=category,
            amount=Money.of(amount, self._currency),
            spent_at=self._clock(),
            description=description,
        )
        self._expense_repo.save(expense)
        logger.info("Expense #%s recorded: %s %s", expense.id, expense.category, expense.amount)
        return _to_dto(expense)


class ListExpensesHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(self) -> list[ExpenseDTO]:
        expenses = sorted(
            self._expense_repo.list_all(), key=lambda e: e.spent_at, reverse=True
        )
        return [_to_dto(e) for e in expenses]
