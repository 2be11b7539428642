"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.exceptions import (
    EntityNotFoundError,
    StockConflictError,
    ValidationError,
)
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class StockUpdate:
    """New absolute stock for one product.

    ``expected_quantity`` is the stock the caller read before computing
    ``quantity``. When set, the update only applies if the stored stock
    still equals it.
    """

    product_id: str
    quantity: int
    expected_quantity: int | None = None


class ProductRepository(ABC):

    @abstractmethod
    def find_all_by_id(self, product_ids: list[str]) -> list[Product]:
        """Return the products matching *product_ids*.

        Unknown ids are skipped silently; the result may be shorter than
        the input or empty.
        """

    @abstractmethod
    def update_quantity(self, updates: list[StockUpdate]) -> None:
        """Apply a batch of stock updates.

        Every update is checked before any is applied. Raises
        StockConflictError if an ``expected_quantity`` does not match
        and EntityNotFoundError if a product is missing.
        """

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""


def check_stock_updates(
    current: dict[str, int], updates: list[StockUpdate]
) -> None:
    """Validate a batch against the stored stock before anything is written.

    *current* maps product id to stored quantity. Implementations call
    this first so that a failing batch leaves every product untouched.
    """
    for update in updates:
        if update.product_id not in current:
            raise EntityNotFoundError(
                f"Product with ID '{update.product_id}' not found"
            )
        if update.quantity < 0:
            raise ValidationError(
                f"Stock for product '{update.product_id}' cannot go negative "
                f"({update.quantity})"
            )
        actual = current[update.product_id]
        if update.expected_quantity is not None and actual != update.expected_quantity:
            raise StockConflictError(update.product_id, update.expected_quantity, actual)
