"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
The order-placement errors carry the offending id (or line) as attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.application.dto import OrderLineRequest


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CustomerNotFoundError(EntityNotFoundError):

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer '{customer_id}' not found")
        self.customer_id = customer_id


class NoProductsFoundError(EntityNotFoundError):
    """None of the requested product ids exist in the catalog."""

    def __init__(self, product_ids: list[str]) -> None:
        super().__init__(
            "Could not find any products with the given ids: "
            + ", ".join(product_ids)
        )
        self.product_ids = list(product_ids)


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Could not find product '{product_id}'")
        self.product_id = product_id


class InsufficientStockError(ValidationError):
    """A requested line asks for more units than the catalog holds."""

    def __init__(self, line: OrderLineRequest, available: int) -> None:
        super().__init__(
            f"Not enough stock for product '{line.product_id}' "
            f"(requested {line.quantity}, {available} available)"
        )
        self.line = line
        self.available = available


class StockConflictError(ValidationError):
    """Stock changed between the read and the decrement.

    Raised by the batched stock update, which runs after the order was
    stored: that order stays written and no stock was decremented.
    """

    def __init__(self, product_id: str, expected: int, actual: int | None) -> None:
        super().__init__(
            f"Stock for product '{product_id}' changed concurrently "
            f"(expected {expected}, found {actual})"
        )
        self.product_id = product_id
        self.expected = expected
        self.actual = actual
