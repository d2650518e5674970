"""Abstract repository for ClientQuery aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from erp.domain.model.client_query import ClientQuery


class QueryRepository(ABC):

    @abstractmethod
    def get_by_id(self, query_id: int) -> ClientQuery | None:
        """Return a query by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ClientQuery]:
        """Return every submitted query."""

    @abstractmethod
    def save(self, query: ClientQuery) -> None:
        """Persist a new or updated query, assigning an ID to new ones."""
