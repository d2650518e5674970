"""Product aggregate and the purchase lots it owns.

A Product carries its whole purchase history as an ordered list of
PurchaseLots.  Lots are append-only: once recorded, the only field that
ever changes is ``remaining_quantity``, and only downwards, when a sale
draws stock from the lot.

``Product.quantity`` is a denormalized cache of the stock on hand.  The
sum of ``remaining_quantity`` across the lots is the ground truth; the
two must always agree (see ``is_consistent``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from erp.domain.exceptions import InvalidQuantity, ValidationError
from erp.domain.model.value_objects import Money, Quantity


@dataclass
class PurchaseLot:
    """A batch of stock acquired in one purchase event.

    ``expenses`` are incidental costs of the purchase (shipping, duties).
    They are reported as operating expenses for the period in which the
    lot was bought and are never folded into the per-unit cost.
    """

    purchased_at: datetime
    quantity: int
    unit_cost: Money
    remaining_quantity: int
    expenses: Money = field(default_factory=Money.zero)
    supplier: str | None = None

    @staticmethod
    def create(
        quantity: int,
        unit_cost: Money,
        expenses: Money | None = None,
        supplier: str | None = None,
        purchased_at: datetime | None = None,
    ) -> PurchaseLot:
        """Record a new lot; every unit bought is initially remaining."""
        qty = Quantity(quantity).value
        return PurchaseLot(
            purchased_at=purchased_at or datetime.now(timezone.utc),
            quantity=qty,
            unit_cost=unit_cost,
            remaining_quantity=qty,
            expenses=expenses if expenses is not None else Money.zero(unit_cost.currency),
            supplier=supplier.strip() if supplier and supplier.strip() else None,
        )

    @property
    def purchase_cost(self) -> Money:
        return self.unit_cost * self.quantity

    @property
    def is_depleted(self) -> bool:
        return self.remaining_quantity == 0

    def draw(self, qty: int) -> None:
        """Take *qty* units out of this lot."""
        if qty <= 0:
            raise InvalidQuantity("Draw quantity must be positive")
        if qty > self.remaining_quantity:
            raise ValidationError(
                f"Cannot draw {qty} units from lot purchased "
                f"{self.purchased_at.isoformat()}, only "
                f"{self.remaining_quantity} remaining"
            )
        self.remaining_quantity -= qty


@dataclass
class Product:
    """A product in the catalog together with its purchase lots.

    The ``__init__`` is intentionally simple so the repository can
    reconstitute persisted products without re-validating; use
    ``Product.register()`` for new ones.
    """

    id: str
    name: str
    price: Money
    description: str | None = None
    quantity: int = 0
    lots: list[PurchaseLot] = field(default_factory=list)
    version: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def register(
        product_id: str,
        name: str,
        price: Money,
        description: str | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _validate_price(price)
        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            description=description.strip() if description else None,
        )

    # --- Stock ----------------------------------------------------------------

    @property
    def lot_remaining(self) -> int:
        return sum(lot.remaining_quantity for lot in self.lots)

    @property
    def is_consistent(self) -> bool:
        return self.quantity == self.lot_remaining

    def receive_lot(self, lot: PurchaseLot) -> None:
        """Append a purchase lot and add its units to the on-hand quantity."""
        if not self.is_active:
            raise ValidationError(f"Product '{self.name}' has been deleted")
        if lot.remaining_quantity != lot.quantity:
            raise ValidationError("A newly received lot must be untouched")
        self.lots.append(lot)
        self.quantity += lot.quantity

    # --- Catalog --------------------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        description: str | None = None,
        price: Money | None = None,
    ) -> None:
        """Change catalog details.

        Recorded sales are unaffected: each captured a price snapshot at
        settlement time.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if description is not None:
            self.description = description.strip() or None
        if price is not None:
            _validate_price(price)
            self.price = price

    def deactivate(self) -> None:
        if not self.is_active:
            raise ValidationError(f"Product '{self.name}' is already deleted")
        self.is_active = False


def _validate_price(price: Money) -> None:
    if price.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
