"""Application service: Place Order use case.

An external (client) purchase.  Identical to a counter sale except that
the buyer must identify themselves by name and email.
"""

from __future__ import annotations

from erp.application.dto import SaleDTO
from erp.application.settle_sale import SettleSaleHandler
from erp.domain.model.sale import CustomerInfo


class PlaceOrderHandler:

    def __init__(self, settle: SettleSaleHandler) -> None:
        self._settle = settle

    def handle(
        self,
        product_id: str,
        quantity: int,
        customer_name: str,
        customer_email: str,
    ) -> SaleDTO:
        customer = CustomerInfo(name=customer_name, email=customer_email)
        return self._settle.handle(product_id, quantity, customer=customer)
