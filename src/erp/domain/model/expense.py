"""Expense: a standalone operating expense (rent, wages, utilities)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from erp.domain.exceptions import ValidationError
from erp.domain.model.value_objects import Money


@dataclass
class Expense:

    id: int | None
    category: str
    amount: Money
    spent_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    description: str | None = None

    @staticmethod
    def record(
        category: str,
        amount: Money,
        spent_at: datetime,
        description: str | None = None,
    ) -> Expense:
        if not category or not category.strip():
            raise ValidationError("Expense category is required")
        if amount.is_zero:
            raise ValidationError("Expense amount must be greater than zero")
        return Expense(
            id=None,
            category=category.strip(),
            amount=amount,
            spent_at=spent_at,
            description=description.strip() if description else None,
        )
