"""Abstract repository for standalone expenses."""

from __future__ import annotations

from abc import ABC, abstractmethod

from erp.domain.model.expense import Expense


class ExpenseRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Expense]:
        """Return every recorded expense."""

    @abstractmethod
    def save(self, expense: Expense) -> None:
        """Persist a new expense, assigning it an ID."""
