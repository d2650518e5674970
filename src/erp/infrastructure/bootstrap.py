"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from erp.application.settle_sale import SettleSaleHandler
from erp.infrastructure.persistence.document_store import JsonDocumentStore
from erp.infrastructure.persistence.json_expense_repository import (
    JsonExpenseRepository,
    JsonIncomeStatementRepository,
)
from erp.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from erp.infrastructure.persistence.json_query_repository import JsonQueryRepository
from erp.infrastructure.persistence.json_sale_repository import JsonSaleRepository
from erp.infrastructure.persistence.json_unit_of_work import JsonSaleUnitOfWork
from erp.infrastructure.settings import settings


@lru_cache(maxsize=None)
def document_store() -> JsonDocumentStore:
    return JsonDocumentStore(settings.DATA_DIR / settings.DATA_FILE)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(document_store())


def sale_repository() -> JsonSaleRepository:
    return JsonSaleRepository(document_store())


def expense_repository() -> JsonExpenseRepository:
    return JsonExpenseRepository(document_store())


def income_statement_repository() -> JsonIncomeStatementRepository:
    return JsonIncomeStatementRepository(document_store())


def query_repository() -> JsonQueryRepository:
    return JsonQueryRepository(document_store())


def sale_unit_of_work() -> JsonSaleUnitOfWork:
    return JsonSaleUnitOfWork(document_store())


def settle_sale_handler() -> SettleSaleHandler:
    return SettleSaleHandler(
        product_repo=product_repository(),
        unit_of_work=sale_unit_of_work(),
        max_attempts=settings.SETTLEMENT_ATTEMPTS,
    )
