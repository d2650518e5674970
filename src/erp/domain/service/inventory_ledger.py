"""Domain service: FIFO inventory ledger.

Computes the cost of goods leaving stock by drawing units from a
product's purchase lots oldest-first, and depletes those lots.

The two-phase approach (validate-then-mutate) ensures a request that
the lots cannot cover leaves every lot untouched.  The service never
changes ``Product.quantity``; the caller decrements it in the same unit
of work that persists the lots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from erp.domain.exceptions import InsufficientInventory
from erp.domain.model.product import Product
from erp.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LotDraw:
    """Units taken from a single lot."""

    purchased_at: datetime
    quantity: int
    unit_cost: Money

    @property
    def cost(self) -> Money:
        return self.unit_cost * self.quantity


@dataclass(frozen=True)
class LotConsumption:
    product_id: str
    quantity: int
    total_cost: Money
    draws: tuple[LotDraw, ...]

    @property
    def average_unit_cost(self) -> Decimal:
        return self.total_cost.amount / self.quantity


@dataclass(frozen=True)
class IntegrityReport:
    product_id: str
    product_name: str
    cached_quantity: int
    lot_quantity: int

    @property
    def is_consistent(self) -> bool:
        return self.cached_quantity == self.lot_quantity


class InventoryLedger:

    @staticmethod
    def available(product: Product) -> int:
        """Units actually held in the product's lots."""
        return product.lot_remaining

    def consume_fifo(self, product: Product, quantity: int) -> LotConsumption:
        """Draw *quantity* units from the product's lots, oldest first.

        Phase 1: select lots with stock, order them by purchase date
                 (ties keep insertion order) and check they cover the
                 request.  Fails before any mutation.
        Phase 2: walk the ordered lots drawing ``min(needed, remaining)``
                 from each and accumulating the exact cost.

        Raises InvalidQuantity for a non-positive or non-int quantity and
        InsufficientInventory when the lots hold fewer units than asked.
        """
        qty = Quantity(quantity).value

        # Phase 1: select, order and validate
        candidates = sorted(
            (lot for lot in product.lots if lot.remaining_quantity > 0),
            key=lambda lot: lot.purchased_at,
        )
        available = sum(lot.remaining_quantity for lot in candidates)
        if available < qty:
            raise InsufficientInventory(product.id, qty, available)

        # Phase 2: draw
        currency = product.price.currency
        total = Money.zero(currency)
        draws: list[LotDraw] = []
        needed = qty
        for lot in candidates:
            if needed == 0:
                break
            take = min(needed, lot.remaining_quantity)
            lot.draw(take)
            draw = LotDraw(lot.purchased_at, take, lot.unit_cost)
            total = total + draw.cost
            draws.append(draw)
            needed -= take

        logger.debug(
            "Drew %d units of product %s from %d lot(s), cost %s",
            qty, product.id, len(draws), total.amount,
        )
        return LotConsumption(
            product_id=product.id,
            quantity=qty,
            total_cost=total,
            draws=tuple(draws),
        )

    def check_integrity(self, product: Product) -> IntegrityReport:
        """Compare the cached on-hand quantity with the lot ground truth."""
        report = IntegrityReport(
            product_id=product.id,
            product_name=product.name,
            cached_quantity=product.quantity,
            lot_quantity=self.available(product),
        )
        if not report.is_consistent:
            logger.warning(
                "inventory integrity anomaly: product %s (%s) caches %d units "
                "but its lots hold %d",
                product.id, product.name, report.cached_quantity, report.lot_quantity,
            )
        return report
