"""Application service: Place Order use case.

Orchestrates the three stores involved in taking an order. Every check
runs before the first write, so a rejected request leaves customers,
catalog and orders exactly as they were:

1. resolve the customer
2. bulk-fetch the requested products (one catalog snapshot)
3. every requested id must be in the snapshot
4. every line must fit in the snapshot's stock
   and all snapshot prices must share one currency
5. snapshot prices into order lines
6. store the order
7. decrement stock from the snapshot figures in one batch
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderLineRequest
from storefront.domain.exceptions import (
    CustomerNotFoundError,
    InsufficientStockError,
    NoProductsFoundError,
    ProductNotFoundError,
    StockConflictError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import (
    ProductRepository,
    StockUpdate,
)

log = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._customer_repo = customer_repo
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(
        self, customer_id: str, requested_lines: list[OrderLineRequest]
    ) -> Order:
        """Place an order and return it as stored.

        Lines for the same product are kept as separate order lines but
        share one stock figure: a line is rejected once the units asked
        for by it and every earlier line for that product exceed the stock.
        """
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        if not requested_lines:
            raise ValidationError("Order must contain at least one line")
        quantities = [Quantity(req.quantity) for req in requested_lines]

        customer = self._customer_repo.find_by_id(customer_id)
        if customer is None:
            log.info("Rejected order: unknown customer %s", customer_id)
            raise CustomerNotFoundError(customer_id)

        requested_ids = list(dict.fromkeys(req.product_id for req in requested_lines))
        log.debug("Resolving %d product(s) for customer %s", len(requested_ids), customer_id)
        catalog = {p.id: p for p in self._product_repo.find_all_by_id(requested_ids)}
        if not catalog:
            log.info("Rejected order: no products found for %s", requested_ids)
            raise NoProductsFoundError(requested_ids)

        self._check_existence(requested_lines, catalog)
        ordered = self._check_stock(requested_lines, catalog)
        self._check_currency(requested_ids, catalog)

        lines = [
            OrderLine(
                product_id=req.product_id,
                quantity=qty,
                price=catalog[req.product_id].price,  # <-- price snapshot
            )
            for req, qty in zip(requested_lines, quantities)
        ]
        order_total = Order.create(customer, lines).total
        order = self._order_repo.create(customer, lines)
        log.debug("Stored order #%s, decrementing stock", order.id)

        # New figures derive from the snapshot, never from a re-read.
        updates = [
            StockUpdate(
                product_id=product_id,
                quantity=catalog[product_id].quantity - total,
                expected_quantity=catalog[product_id].quantity,
            )
            for product_id, total in ordered.items()
        ]
        try:
            self._product_repo.update_quantity(updates)
        except StockConflictError as exc:
            log.warning("Order #%s stored but stock not decremented: %s", order.id, exc)
            raise

        log.info(
            "Placed order #%s for customer %s: %d line(s), total %s",
            order.id, customer.id, len(order.lines), order_total,
        )
        return order

    # --- Validation phases ----------------------------------------------------

    @staticmethod
    def _check_existence(
        requested_lines: list[OrderLineRequest], catalog: dict[str, Product]
    ) -> None:
        for req in requested_lines:
            if req.product_id not in catalog:
                log.info("Rejected order: unknown product %s", req.product_id)
                raise ProductNotFoundError(req.product_id)

    @staticmethod
    def _check_currency(
        product_ids: list[str], catalog: dict[str, Product]
    ) -> None:
        """All lines of one order must be priced in the same currency."""
        currencies = list(dict.fromkeys(catalog[pid].price.currency for pid in product_ids))
        if len(currencies) > 1:
            log.info("Rejected order: mixed currencies %s", currencies)
            raise ValidationError(
                "Cannot order products priced in different currencies: "
                + ", ".join(currencies)
            )

    @staticmethod
    def _check_stock(
        requested_lines: list[OrderLineRequest], catalog: dict[str, Product]
    ) -> dict[str, int]:
        """Return units ordered per product, in first-seen order."""
        ordered: dict[str, int] = {}
        for req in requested_lines:
            product = catalog[req.product_id]
            wanted = ordered.get(req.product_id, 0) + req.quantity
            if not product.has_stock_for(wanted):
                available = product.quantity - ordered.get(req.product_id, 0)
                log.info(
                    "Rejected order: product %s has %d left, %d requested",
                    req.product_id, available, req.quantity,
                )
                raise InsufficientStockError(req, available)
            ordered[req.product_id] = wanted
        return ordered
