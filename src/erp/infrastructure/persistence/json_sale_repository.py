"""JSON-document-backed implementation of SaleRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from erp.domain.model.sale import Sale, SaleStatus
from erp.domain.model.value_objects import Money, Quantity
from erp.domain.repository.sale_repository import SaleRepository
from erp.infrastructure.persistence.document_store import (
    Document,
    JsonDocumentStore,
    next_int_id,
)


class JsonSaleRepository(SaleRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: int) -> Sale | None:
        for raw in self._store.read()["sales"]:
            if raw["id"] == sale_id:
                return self.to_domain(raw)
        return None

    def list_all(self) -> list[Sale]:
        return [self.to_domain(raw) for raw in self._store.read()["sales"]]

    def save(self, sale: Sale) -> None:
        with self._store.transaction() as document:
            self.write(document, sale)

    # --- Shared with the unit of work -----------------------------------------

    @classmethod
    def write(cls, document: Document, sale: Sale) -> None:
        records = document["sales"]
        if sale.id is None:
            sale.id = next_int_id(records)

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(records):
            if raw["id"] == sale.id:
                records[i] = cls.to_raw(sale)
                return
        records.append(cls.to_raw(sale))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "product_id": sale.product_id,
            "product_name": sale.product_name,
            "quantity": sale.quantity.value,
            "unit_price": str(sale.unit_price.amount),
            "total_cost": str(sale.total_cost.amount),
            "currency": sale.unit_price.currency,
            "customer_name": sale.customer_name,
            "customer_email": sale.customer_email,
            "status": sale.status.value,
            "sold_at": sale.sold_at.isoformat(),
            "rejection_reason": sale.rejection_reason,
        }

    @staticmethod
    def to_domain(raw: dict) -> Sale:
        currency = raw.get("currency", "USD")
        return Sale(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["unit_price"]), currency),
            total_cost=Money(Decimal(raw["total_cost"]), currency),
            customer_name=raw.get("customer_name"),
            customer_email=raw.get("customer_email"),
            status=SaleStatus(raw["status"]),
            sold_at=datetime.fromisoformat(raw["sold_at"]),
            rejection_reason=raw.get("rejection_reason"),
        )
