"""JSON-document-backed implementation of QueryRepository."""

from __future__ import annotations

from datetime import datetime

from erp.domain.model.client_query import ClientQuery, QueryStatus, ResponseType
from erp.domain.repository.query_repository import QueryRepository
from erp.infrastructure.persistence.document_store import JsonDocumentStore, next_int_id


class JsonQueryRepository(QueryRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def get_by_id(self, query_id: int) -> ClientQuery | None:
        for raw in self._store.read()["queries"]:
            if raw["id"] == query_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[ClientQuery]:
        return [self._to_domain(raw) for raw in self._store.read()["queries"]]

    def save(self, query: ClientQuery) -> None:
        with self._store.transaction() as document:
            records = document["queries"]
            if query.id is None:
                query.id = next_int_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == query.id:
                    records[i] = self._to_raw(query)
                    return
            records.append(self._to_raw(query))

    @staticmethod
    def _to_raw(query: ClientQuery) -> dict:
        return {
            "id": query.id,
            "customer_name": query.customer_name,
            "customer_email": query.customer_email,
            "message": query.message,
            "status": query.status.value,
            "response": query.response,
            "response_type": query.response_type.value if query.response_type else None,
            "created_at": query.created_at.isoformat(),
            "responded_at": query.responded_at.isoformat() if query.responded_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ClientQuery:
        responded_at = raw.get("responded_at")
        response_type = raw.get("response_type")
        return ClientQuery(
            id=raw["id"],
            customer_name=raw["customer_name"],
            customer_email=raw["customer_email"],
            message=raw["message"],
            status=QueryStatus(raw["status"]),
            response=raw.get("response"),
            response_type=ResponseType(response_type) if response_type else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            responded_at=datetime.fromisoformat(responded_at) if responded_at else None,
        )
