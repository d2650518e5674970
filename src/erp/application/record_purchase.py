"""Application service: Record Purchase use case.

Buying stock creates a new purchase lot.  With a ``product_id`` the lot
restocks an existing product; without one a new product is registered
in the catalog and receives the lot as its first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from erp.application.dto import ProductDTO
from erp.domain.exceptions import ProductNotFound, ValidationError
from erp.domain.model.product import Product, PurchaseLot
from erp.domain.model.value_objects import Money
from erp.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordPurchaseHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        clock: Callable[[], datetime] = _utcnow,
        currency: str = "USD",
    ) -> None:
        self._product_repo = product_repo
        self._clock = clock
        self._currency = currency

    def handle(
        self,
        quantity: int,
        unit_cost: str,
        expenses: str = "0",
        supplier: str | None = None,
        product_id: str | None = None,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
    ) -> ProductDTO:
        lot = PurchaseLot.create(
            quantity=quantity,
            unit_cost=Money.of(unit_cost, self._currency),
            expenses=Money.of(expenses, self._currency),
            supplier=supplier,
            purchased_at=self._clock(),
        )

        if product_id is not None:
            product = self._product_repo.get_by_id(product_id)
            if product is None or not product.is_active:
                raise ProductNotFound(product_id)
            if price is not None:
                product.update_details(price=Money.of(price, self._currency))
        else:
            product = self._register(name, description, price)

        expected_version = product.version
        product.receive_lot(lot)
        self._product_repo.save(product, expected_version)

        logger.info(
            "Purchase recorded: %d x %s at %s (expenses %s)",
            lot.quantity, product.name, lot.unit_cost, lot.expenses,
        )
        return ProductDTO.from_product(product)

    def _register(
        self, name: str | None, description: str | None, price: str | None
    ) -> Product:
        if price is None:
            raise ValidationError("A list price is required for a new product")
        if name and self._product_repo.get_by_name(name) is not None:
            raise ValidationError(f"Product '{name}' already exists")
        product_id = self._product_repo.next_id()
        return Product.register(
            product_id=product_id,
            name=name or f"Product-{product_id}",
            price=Money.of(price, self._currency),
            description=description,
        )
