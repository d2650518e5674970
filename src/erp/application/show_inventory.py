"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from erp.domain.repository.product_repository import ProductRepository
from erp.domain.service.inventory_ledger import IntegrityReport, InventoryLedger


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    price: str
    on_hand: int
    in_lots: int
    open_lots: int
    consistent: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, in_stock_only: bool = False) -> list[InventoryLineDTO]:
        """Active products, lowest stock first."""
        products = [p for p in self._product_repo.list_all() if p.is_active]
        if in_stock_only:
            products = [p for p in products if p.quantity > 0]
        products.sort(key=lambda p: (p.quantity, p.name.lower()))
        return [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                price=str(p.price),
                on_hand=p.quantity,
                in_lots=p.lot_remaining,
                open_lots=sum(1 for lot in p.lots if not lot.is_depleted),
                consistent=p.is_consistent,
            )
            for p in products
        ]


class CheckInventoryIntegrityHandler:
    """Finds products whose cached quantity disagrees with their lots."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._ledger = InventoryLedger()

    def handle(self) -> list[IntegrityReport]:
        reports = [self._ledger.check_integrity(p) for p in self._product_repo.list_all()]
        return [r for r in reports if not r.is_consistent]
