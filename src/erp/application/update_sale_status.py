"""Application service: Update Sale Status use case.

Administrative status changes (processing, cancelled, refunded, ...).
These are bookkeeping only: they never return stock to the lots and
never alter the recorded price or cost.
"""

from __future__ import annotations

import logging

from erp.domain.exceptions import SaleNotFound, ValidationError
from erp.domain.model.sale import SaleStatus
from erp.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class UpdateSaleStatusHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(self, sale_id: int, status: str, reason: str | None = None) -> None:
        try:
            new_status = SaleStatus(status.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in SaleStatus)
            raise ValidationError(f"Invalid status '{status}' (expected one of: {valid})")

        sale = self._sale_repo.get_by_id(sale_id)
        if sale is None:
            raise SaleNotFound(sale_id)

        previous = sale.status
        sale.change_status(new_status, reason=reason)
        self._sale_repo.save(sale)
        logger.info(
            "Sale #%d status %s -> %s", sale_id, previous.value, new_status.value
        )
