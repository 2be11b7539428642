"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order, OrderLine


class OrderRepository(ABC):

    @abstractmethod
    def create(self, customer: Customer, lines: list[OrderLine]) -> Order:
        """Store a new order and return it with order and line IDs assigned."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""
