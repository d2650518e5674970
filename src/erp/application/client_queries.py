"""Application services: client query use cases.

Customers submit questions; staff list them, answer the pending ones and
follow the backlog through simple counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from erp.domain.exceptions import QueryNotFound
from erp.domain.model.client_query import ClientQuery
from erp.domain.model.sale import CustomerInfo
from erp.domain.repository.query_repository import QueryRepository

logger = logging.getLogger(__name__)

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class QueryDTO:
    id: int
    customer_name: str
    customer_email: str
    message: str
    status: str
    response: str | None
    response_type: str | None
    created_at: str

    @staticmethod
    def from_query(query: ClientQuery) -> QueryDTO:
        return QueryDTO(
            id=query.id,  # type: ignore[arg-type]
            customer_name=query.customer_name,
            customer_email=query.customer_email,
            message=query.message,
            status=query.status.value,
            response=query.response,
            response_type=query.response_type.value if query.response_type else None,
            created_at=query.created_at.strftime(_TIMESTAMP),
        )


@dataclass(frozen=True)
class QueryStats:
    total: int
    pending: int
    completed: int
    answered: int


class SubmitQueryHandler:

    def __init__(
        self, query_repo: QueryRepository, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self._query_repo = query_repo
        self._clock = clock

    def handle(self, name: str, email: str, message: str) -> QueryDTO:
        query = ClientQuery.submit(CustomerInfo(name=name, email=email), message, self._clock())
        self._query_repo.save(query)
        logger.info("Query #%s received from %s", query.id, query.customer_email)
        return QueryDTO.from_query(query)


class ListQueriesHandler:

    def __init__(self, query_repo: QueryRepository) -> None:
        self._query_repo = query_repo

    def handle(self, email: str | None = None, pending_only: bool = False) -> list[QueryDTO]:
        """Queries newest first, optionally one customer's or only pending ones."""
        queries = [
            q for q in self._query_repo.list_all()
            if (email is None or q.customer_email.lower() == email.strip().lower())
            and (not pending_only or q.is_pending)
        ]
        queries.sort(key=lambda q: q.created_at, reverse=True)
        return [QueryDTO.from_query(q) for q in queries]


class RespondToQueryHandler:

    def __init__(
        self, query_repo: QueryRepository, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self._query_repo = query_repo
        self._clock = clock

    def handle(self, query_id: int, response: str) -> QueryDTO:
        query = self._query_repo.get_by_id(query_id)
        if query is None:
            raise QueryNotFound(query_id)
        query.respond(response, self._clock())
        self._query_repo.save(query)
        logger.info("Query #%d answered", query_id)
        return QueryDTO.from_query(query)


class QueryStatsHandler:

    def __init__(self, query_repo: QueryRepository) -> None:
        self._query_repo = query_repo

    def handle(self) -> QueryStats:
        queries = self._query_repo.list_all()
        pending = sum(1 for q in queries if q.is_pending)
        return QueryStats(
            total=len(queries),
            pending=pending,
            completed=len(queries) - pending,
            answered=sum(1 for q in queries if q.response),
        )
