"""ClientQuery aggregate: a question sent in by a customer.

A query arrives ``pending`` and becomes ``complete`` once staff have
answered it.  Answering again replaces the previous response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from erp.domain.exceptions import ValidationError
from erp.domain.model.sale import CustomerInfo


class QueryStatus(Enum):
    PENDING = "pending"
    COMPLETE = "complete"


class ResponseType(Enum):
    MANUAL = "manual"


@dataclass
class ClientQuery:

    id: int | None
    customer_name: str
    customer_email: str
    message: str
    status: QueryStatus = QueryStatus.PENDING
    response: str | None = None
    response_type: ResponseType | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    responded_at: datetime | None = None

    @staticmethod
    def submit(customer: CustomerInfo, message: str, submitted_at: datetime) -> ClientQuery:
        if not message or not message.strip():
            raise ValidationError("Query message is required")
        return ClientQuery(
            id=None,
            customer_name=customer.name.strip(),
            customer_email=customer.email.strip(),
            message=message.strip(),
            created_at=submitted_at,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == QueryStatus.PENDING

    def respond(self, response: str, responded_at: datetime) -> None:
        if not response or not response.strip():
            raise ValidationError("A response is required")
        self.response = response.strip()
        self.response_type = ResponseType.MANUAL
        self.status = QueryStatus.COMPLETE
        self.responded_at = responded_at
