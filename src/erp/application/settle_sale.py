"""Application service: Settle Sale use case.

Sells a quantity of one product: checks stock, draws the FIFO cost from
the product's purchase lots, snapshots the current list price and
records a completed Sale.

The mutated product and the new sale are handed to the unit of work as
one atomic, version-checked write.  If another settlement changed the
product in between, the whole attempt (reload, checks, FIFO walk) is
repeated from fresh data, up to ``max_attempts`` times.  Nothing is
persisted by an attempt that fails.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from erp.application.dto import SaleDTO
from erp.domain.exceptions import (
    ConcurrentModification,
    InsufficientInventory,
    InsufficientStock,
    ProductNotFound,
)
from erp.domain.model.sale import CustomerInfo, Sale
from erp.domain.model.value_objects import Quantity
from erp.domain.repository.product_repository import ProductRepository
from erp.domain.repository.unit_of_work import SaleUnitOfWork
from erp.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

MAX_SETTLEMENT_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SettleSaleHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        unit_of_work: SaleUnitOfWork,
        clock: Callable[[], datetime] = _utcnow,
        max_attempts: int = MAX_SETTLEMENT_ATTEMPTS,
    ) -> None:
        if not 1 <= max_attempts <= MAX_SETTLEMENT_ATTEMPTS:
            raise ValueError(
                f"max_attempts must be between 1 and {MAX_SETTLEMENT_ATTEMPTS}"
            )
        self._product_repo = product_repo
        self._unit_of_work = unit_of_work
        self._clock = clock
        self._max_attempts = max_attempts
        self._ledger = InventoryLedger()

    def handle(
        self,
        product_id: str,
        quantity: int,
        customer: CustomerInfo | None = None,
    ) -> SaleDTO:
        """Settle a sale, retrying on concurrent modification.

        Raises InvalidQuantity, ProductNotFound, InsufficientStock,
        InsufficientInventory, or ConcurrentModification once every
        attempt has been used up.
        """
        qty = Quantity(quantity)

        attempt = 1
        while True:
            try:
                sale = self._attempt(product_id, qty, customer)
            except ConcurrentModification as exc:
                if attempt >= self._max_attempts:
                    logger.error(
                        "Settlement of product %s abandoned after %d attempts: %s",
                        product_id, attempt, exc,
                    )
                    raise
                logger.warning(
                    "Product %s changed during settlement (attempt %d/%d), retrying",
                    product_id, attempt, self._max_attempts,
                )
                attempt += 1
                continue
            return SaleDTO.from_sale(sale)

    def _attempt(
        self, product_id: str, qty: Quantity, customer: CustomerInfo | None
    ) -> Sale:
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise ProductNotFound(product_id)
        read_version = product.version

        # Fast precheck against the cached aggregate
        if qty.value > product.quantity:
            raise InsufficientStock(product.id, qty.value, product.quantity)

        # Authoritative check and lot depletion
        try:
            consumption = self._ledger.consume_fifo(product, qty.value)
        except InsufficientInventory as exc:
            logger.warning(
                "inventory integrity anomaly: product %s (%s) reports %d on hand "
                "but its lots hold %d",
                product.id, product.name, product.quantity, exc.available,
            )
            raise

        sale = Sale.settled(
            product_id=product.id,
            product_name=product.name,
            quantity=qty,
            unit_price=product.price,  # <-- price snapshot
            total_cost=consumption.total_cost,
            customer=customer,
            sold_at=self._clock(),
        )
        product.quantity -= qty.value

        self._unit_of_work.commit_sale(product, read_version, sale)

        self._ledger.check_integrity(product)
        logger.info(
            "Sale #%s settled: %d x %s at %s (FIFO cost %s)",
            sale.id, qty.value, product.name, sale.unit_price, sale.total_cost,
        )
        return sale
