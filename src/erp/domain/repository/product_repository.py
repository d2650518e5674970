"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.

Writes are optimistic: ``save`` succeeds only if the stored product still
carries ``expected_version``, and bumps ``product.version`` on success.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from erp.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product (with all of its lots) by ID, or None."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return the active product with this name (case-insensitive), or None.

        Deleted products release their name for reuse.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product, including deleted ones."""

    @abstractmethod
    def save(self, product: Product, expected_version: int) -> None:
        """Persist a new or updated product.

        Raises ConcurrentModification if the stored version differs from
        ``expected_version`` (a new product is expected at version 0).
        """
