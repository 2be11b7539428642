"""JSON-file-backed implementation of OrderRepository.

Orders keep the customer's id and name as they were at placement, and
every line keeps its own id (unique across all orders) and price.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def create(self, customer: Customer, lines: list[OrderLine]) -> Order:
        orders = self._load_raw()
        order = Order.create(customer, lines)

        order.id = max((o["id"] for o in orders), default=0) + 1
        next_line_id = max(
            (line["id"] for o in orders for line in o["lines"]), default=0
        ) + 1
        for offset, line in enumerate(order.lines):
            line.id = next_line_id + offset

        orders.append(self._to_raw(order))
        self._persist_raw(orders)
        return order

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer.id,
            "customer_name": order.customer.name,
            "created_at": order.created_at.isoformat(),
            "lines": [
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "quantity": line.quantity.value,
                    "price": str(line.price.amount),
                    "currency": line.price.currency,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                id=line["id"],
                product_id=line["product_id"],
                quantity=Quantity(line["quantity"]),
                price=Money(Decimal(line["price"]), line.get("currency", "USD")),
            )
            for line in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            customer=Customer(id=raw["customer_id"], name=raw["customer_name"]),
            lines=lines,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
