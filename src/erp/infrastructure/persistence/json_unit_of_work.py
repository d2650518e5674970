"""JSON-document-backed implementation of SaleUnitOfWork."""

from __future__ import annotations

from erp.domain.model.product import Product
from erp.domain.model.sale import Sale
from erp.domain.repository.unit_of_work import SaleUnitOfWork
from erp.infrastructure.persistence.document_store import JsonDocumentStore
from erp.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from erp.infrastructure.persistence.json_sale_repository import JsonSaleRepository


class JsonSaleUnitOfWork(SaleUnitOfWork):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def commit_sale(self, product: Product, expected_version: int, sale: Sale) -> None:
        # Both writes go into one document transaction: if the version
        # check fails nothing is persisted.
        previous_version = product.version
        try:
            with self._store.transaction() as document:
                JsonProductRepository.write(document, product, expected_version)
                JsonSaleRepository.write(document, sale)
        except Exception:
            product.version = previous_version
            sale.id = None
            raise
