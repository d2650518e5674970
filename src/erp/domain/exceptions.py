"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Errors that a user can fix by changing their input derive from
ValidationError.  InsufficientInventory and ConcurrentModification do not:
they signal server-side conditions (diverged stock records, exhausted
retries) and callers must not present them as input mistakes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A quantity was zero, negative or not an integer."""


class InvalidStatusTransition(ValidationError):
    """A sale was moved to a status it cannot reach from its current one."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' not found")
        self.product_id = product_id


class SaleNotFound(EntityNotFoundError):

    def __init__(self, sale_id: int) -> None:
        super().__init__(f"Sale #{sale_id} not found")
        self.sale_id = sale_id


class QueryNotFound(EntityNotFoundError):

    def __init__(self, query_id: int) -> None:
        super().__init__(f"Query #{query_id} not found")
        self.query_id = query_id


class InsufficientStock(ValidationError):
    """The product's on-hand quantity cannot cover the requested amount."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Only {available} units available "
            f"(requested {requested} of product '{product_id}')"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InsufficientInventory(DomainException):
    """The purchase lots of a product cannot cover the requested amount."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Not enough inventory in purchase lots for product '{product_id}' "
            f"(need {requested}, lots hold {available})"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ConcurrentModification(DomainException):
    """A product changed between being read and being written back."""

    def __init__(
        self, product_id: str, expected_version: int, actual_version: int
    ) -> None:
        super().__init__(
            f"Product '{product_id}' was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
        self.product_id = product_id
        self.expected_version = expected_version
        self.actual_version = actual_version
