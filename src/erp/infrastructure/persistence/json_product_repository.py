"""JSON-document-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from erp.domain.exceptions import ConcurrentModification
from erp.domain.model.product import Product, PurchaseLot
from erp.domain.model.value_objects import Money
from erp.domain.repository.product_repository import ProductRepository
from erp.infrastructure.persistence.document_store import Document, JsonDocumentStore


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        products = self._store.read()["products"]
        if not products:
            return "1"
        return str(max(int(p["id"]) for p in products) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._store.read()["products"]:
            if raw["id"] == product_id:
                return self.to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._store.read()["products"]:
            if raw.get("is_active", True) and raw["name"].lower() == name.lower():
                return self.to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self.to_domain(raw) for raw in self._store.read()["products"]]

    def save(self, product: Product, expected_version: int) -> None:
        with self._store.transaction() as document:
            self.write(document, product, expected_version)

    # --- Shared with the unit of work -----------------------------------------

    @classmethod
    def write(cls, document: Document, product: Product, expected_version: int) -> None:
        """Version-checked upsert into an open document.

        Bumps ``product.version`` only once the check has passed.
        """
        records = document["products"]
        index = next(
            (i for i, raw in enumerate(records) if raw["id"] == product.id), None
        )
        stored_version = records[index]["version"] if index is not None else 0
        if stored_version != expected_version:
            raise ConcurrentModification(product.id, expected_version, stored_version)

        product.version = expected_version + 1
        raw = cls.to_raw(product)
        if index is None:
            records.append(raw)
        else:
            records[index] = raw

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "quantity": product.quantity,
            "version": product.version,
            "is_active": product.is_active,
            "created_at": product.created_at.isoformat(),
            "lots": [
                {
                    "purchased_at": lot.purchased_at.isoformat(),
                    "quantity": lot.quantity,
                    "unit_cost": str(lot.unit_cost.amount),
                    "expenses": str(lot.expenses.amount),
                    "supplier": lot.supplier,
                    "remaining_quantity": lot.remaining_quantity,
                }
                for lot in product.lots
            ],
        }

    @staticmethod
    def to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        lots = [
            PurchaseLot(
                purchased_at=datetime.fromisoformat(lot["purchased_at"]),
                quantity=lot["quantity"],
                unit_cost=Money(Decimal(lot["unit_cost"]), currency),
                remaining_quantity=lot["remaining_quantity"],
                expenses=Money(Decimal(lot.get("expenses", "0")), currency),
                supplier=lot.get("supplier"),
            )
            for lot in raw.get("lots", [])
        ]
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), currency),
            description=raw.get("description"),
            quantity=raw.get("quantity", 0),
            lots=lots,
            version=raw.get("version", 0),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
