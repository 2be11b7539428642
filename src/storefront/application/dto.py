"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderLineRequest:
    """Input: one requested product id and how many units."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single stored line as displayed to the user."""

    id: int
    product_id: str
    quantity: int
    price: str  # formatted, e.g. "10.00 USD"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_id: str
    customer_name: str
    lines: list[OrderLineDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    quantity: int


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer.id,
        customer_name=order.customer.name,
        lines=[
            OrderLineDTO(
                id=line.id,  # type: ignore[arg-type]
                product_id=line.product_id,
                quantity=line.quantity.value,
                price=str(line.price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
