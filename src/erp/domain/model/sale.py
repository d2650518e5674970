"""Sale aggregate: the financial record of stock leaving the business.

A Sale is created by the settlement use case at the moment its FIFO
cost has been drawn from the product's lots.  From then on the price
snapshot and the cost are immutable facts; only the status (and the
reason recorded on cancellation) may change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from erp.domain.exceptions import InvalidStatusTransition, ValidationError
from erp.domain.model.value_objects import Money, Quantity


class SaleStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


_TRANSITIONS: dict[SaleStatus, frozenset[SaleStatus]] = {
    SaleStatus.PENDING: frozenset(
        {SaleStatus.PROCESSING, SaleStatus.COMPLETED, SaleStatus.CANCELLED}
    ),
    SaleStatus.PROCESSING: frozenset(
        {SaleStatus.COMPLETED, SaleStatus.CANCELLED, SaleStatus.REFUNDED}
    ),
    SaleStatus.COMPLETED: frozenset(
        {SaleStatus.PROCESSING, SaleStatus.CANCELLED, SaleStatus.REFUNDED}
    ),
    SaleStatus.CANCELLED: frozenset(),
    SaleStatus.REFUNDED: frozenset(),
}


@dataclass(frozen=True)
class CustomerInfo:
    """Who bought the goods.  Internal (counter) sales carry none."""

    name: str
    email: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Customer name is required")
        if not self.email or "@" not in self.email:
            raise ValidationError(f"Invalid customer email: {self.email!r}")


@dataclass
class Sale:
    """Aggregate root for completed and in-flight sales.

    ``total_cost`` is the exact FIFO cost of the units sold.  The average
    ``unit_cost`` is derived from it rather than stored so that
    ``unit_cost * quantity`` always reproduces the charged cost exactly.
    """

    id: int | None
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at settlement time
    total_cost: Money
    customer_name: str | None = None
    customer_email: str | None = None
    status: SaleStatus = SaleStatus.COMPLETED
    sold_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rejection_reason: str | None = None

    @staticmethod
    def settled(
        product_id: str,
        product_name: str,
        quantity: Quantity,
        unit_price: Money,
        total_cost: Money,
        customer: CustomerInfo | None,
        sold_at: datetime,
    ) -> Sale:
        return Sale(
            id=None,
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=total_cost,
            customer_name=customer.name.strip() if customer else None,
            customer_email=customer.email.strip() if customer else None,
            status=SaleStatus.COMPLETED,
            sold_at=sold_at,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def unit_cost(self) -> Decimal:
        return self.total_cost.amount / self.quantity.value

    @property
    def cost_of_goods(self) -> Money:
        return self.total_cost

    @property
    def is_completed(self) -> bool:
        return self.status == SaleStatus.COMPLETED

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: SaleStatus, reason: str | None = None) -> None:
        """Administrative status change.  Never touches inventory."""
        if new_status == self.status:
            raise InvalidStatusTransition(
                f"Sale #{self.id} is already {self.status.value}"
            )
        if new_status not in _TRANSITIONS[self.status]:
            raise InvalidStatusTransition(
                f"Cannot change sale #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        if new_status == SaleStatus.CANCELLED:
            self.rejection_reason = reason.strip() if reason and reason.strip() else None
