"""Application service: List Sales use case (query)."""

from __future__ import annotations

from datetime import datetime

from erp.application.dto import SaleDTO
from erp.domain.exceptions import ValidationError
from erp.domain.model.sale import SaleStatus
from erp.domain.repository.sale_repository import SaleRepository


class ListSalesHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(
        self,
        status: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        email: str | None = None,
        customers_only: bool = False,
        limit: int | None = None,
    ) -> list[SaleDTO]:
        """Return sales newest first.

        ``start``/``end`` are inclusive.  ``customers_only`` keeps only
        sales placed by an identified customer (client purchases);
        ``status="all"`` is the same as no status filter.
        """
        wanted: SaleStatus | None = None
        if status and status != "all":
            try:
                wanted = SaleStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid status filter '{status}'")
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be positive")

        sales = []
        for sale in self._sale_repo.list_all():
            if wanted is not None and sale.status != wanted:
                continue
            if start is not None and sale.sold_at < start:
                continue
            if end is not None and sale.sold_at > end:
                continue
            if customers_only and not sale.customer_email:
                continue
            if email is not None and (sale.customer_email or "").lower() != email.lower():
                continue
            sales.append(sale)

        sales.sort(key=lambda s: s.sold_at, reverse=True)
        if limit is not None:
            sales = sales[:limit]
        return [SaleDTO.from_sale(s) for s in sales]
