"""Application service: Update Product use case."""

from __future__ import annotations

from erp.application.dto import ProductDTO
from erp.domain.exceptions import ProductNotFound, ValidationError
from erp.domain.model.value_objects import Money
from erp.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, currency: str = "USD") -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
    ) -> ProductDTO:
        """Update a product's catalog details.

        This does NOT affect any recorded sales: they captured a
        price snapshot at settlement time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise ProductNotFound(product_id)

        if name is not None and name.strip().lower() != product.name.lower():
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product '{name}' already exists")

        expected_version = product.version
        product.update_details(
            name=name,
            description=description,
            price=Money.of(price, self._currency) if price is not None else None,
        )
        self._product_repo.save(product, expected_version)
        return ProductDTO.from_product(product)
