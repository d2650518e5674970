"""JSON-document-backed implementations of the finance repositories."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from erp.domain.model.expense import Expense
from erp.domain.model.financials import IncomeStatement
from erp.domain.model.value_objects import Money
from erp.domain.repository.expense_repository import ExpenseRepository
from erp.domain.repository.income_statement_repository import (
    IncomeStatementRepository,
)
from erp.infrastructure.persistence.document_store import JsonDocumentStore, next_int_id


class JsonExpenseRepository(ExpenseRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def list_all(self) -> list[Expense]:
        return [self._to_domain(raw) for raw in self._store.read()["expenses"]]

    def save(self, expense: Expense) -> None:
        with self._store.transaction() as document:
            records = document["expenses"]
            if expense.id is None:
                expense.id = next_int_id(records)
            records.append(self._to_raw(expense))

    @staticmethod
    def _to_raw(expense: Expense) -> dict:
        return {
            "id": expense.id,
            "category": expense.category,
            "amount": str(expense.amount.amount),
            "currency": expense.amount.currency,
            "spent_at": expense.spent_at.isoformat(),
            "description": expense.description,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Expense:
        return Expense(
            id=raw["id"],
            category=raw["category"],
            amount=Money(Decimal(raw["amount"]), raw.get("currency", "USD")),
            spent_at=datetime.fromisoformat(raw["spent_at"]),
            description=raw.get("description"),
        )


class JsonIncomeStatementRepository(IncomeStatementRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def get_by_month(self, month: str) -> IncomeStatement | None:
        for raw in self._store.read()["income_statements"]:
            if raw["month"] == month:
                return self._to_domain(raw)
        return None

    def save(self, statement: IncomeStatement) -> None:
        with self._store.transaction() as document:
            records = [
                r for r in document["income_statements"] if r["month"] != statement.month
            ]
            records.append(self._to_raw(statement))
            records.sort(key=lambda r: r["month"])
            document["income_statements"] = records

    @staticmethod
    def _to_raw(statement: IncomeStatement) -> dict:
        return {
            "month": statement.month,
            "year": statement.year,
            "total_revenue": str(statement.total_revenue),
            "cost_of_goods_sold": str(statement.cost_of_goods_sold),
            "gross_profit": str(statement.gross_profit),
            "operating_expenses": str(statement.operating_expenses),
            "net_profit": str(statement.net_profit),
            "created_at": statement.created_at.isoformat(),
            "updated_at": statement.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> IncomeStatement:
        return IncomeStatement(
            month=raw["month"],
            year=raw["year"],
            total_revenue=Decimal(raw["total_revenue"]),
            cost_of_goods_sold=Decimal(raw["cost_of_goods_sold"]),
            operating_expenses=Decimal(raw["operating_expenses"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
