"""Order aggregate: the result of a successful placement.

The Order is an aggregate root that owns its lines. Once stored it is
never modified by this system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.customer import Customer
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class OrderLine:
    """One ordered product with the price it had when the order was placed."""

    product_id: str
    quantity: Quantity
    price: Money  # snapshot, decoupled from later catalog changes
    id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders. The plain ``__init__`` lets
    repositories reconstitute stored orders without re-validating.
    """

    id: int | None
    customer: Customer
    lines: list[OrderLine]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(customer: Customer, lines: list[OrderLine]) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one line")
        return Order(id=None, customer=customer, lines=list(lines))

    @property
    def total(self) -> Money:
        if not self.lines:
            return Money.zero()
        result = Money.zero(self.lines[0].price.currency)
        for line in self.lines:
            result = result + line.line_total
        return result
