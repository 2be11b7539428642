"""Product aggregate.

Products live independently of orders. Catalog management changes their
price; order placement is the only thing that lowers their stock.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A catalog entry with its currently available stock.

    Invariants:
    - ``price`` is never negative (enforced by Money)
    - ``quantity`` is never negative
    """

    id: str
    name: str
    price: Money
    quantity: int = 0

    def __post_init__(self) -> None:
        _check_stock(self.quantity)

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing orders are unaffected: each line keeps the price it
        was placed at.
        """
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        _check_stock(quantity)
        self.quantity = quantity

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.quantity


def _check_stock(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Stock quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity < 0:
        raise ValidationError(f"Stock quantity cannot be negative, got {quantity}")
