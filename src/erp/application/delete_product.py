"""Application service: Delete Product use case.

Products are soft-deleted: recorded sales keep referring to them and
their purchase lots stay part of the cost history.
"""

from __future__ import annotations

from erp.domain.exceptions import ProductNotFound
from erp.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        expected_version = product.version
        product.deactivate()
        self._product_repo.save(product, expected_version)
