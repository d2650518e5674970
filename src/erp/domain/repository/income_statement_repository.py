"""Abstract repository for monthly income statement snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod

from erp.domain.model.financials import IncomeStatement


class IncomeStatementRepository(ABC):

    @abstractmethod
    def get_by_month(self, month: str) -> IncomeStatement | None:
        """Return the snapshot for ``YYYY-MM``, or None."""

    @abstractmethod
    def save(self, statement: IncomeStatement) -> None:
        """Insert or replace the snapshot for ``statement.month``."""
