"""Atomic write boundary for a sale settlement.

Settling a sale changes two aggregates: the Product (its lots and its
on-hand quantity) and a brand-new Sale.  Both writes must land together
or not at all, so they go through a single ``commit_sale`` call instead
of two independent repository saves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from erp.domain.model.product import Product
from erp.domain.model.sale import Sale


class SaleUnitOfWork(ABC):

    @abstractmethod
    def commit_sale(self, product: Product, expected_version: int, sale: Sale) -> None:
        """Persist the mutated product and the new sale as one write.

        Raises ConcurrentModification, persisting nothing, if the stored
        product is no longer at ``expected_version``.  On success the
        product's version is bumped and the sale is assigned an ID.
        """
