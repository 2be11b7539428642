"""Integration tests for the PlaceOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

from decimal import Decimal

import pytest

from storefront.application.dto import OrderLineRequest
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import (
    CustomerNotFoundError,
    EntityNotFoundError,
    InsufficientStockError,
    NoProductsFoundError,
    ProductNotFoundError,
    StockConflictError,
    ValidationError,
)
from storefront.domain.model.customer import Customer
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import StockUpdate
from tests.fakes import (
    FakeCustomerRepository,
    FakeOrderRepository,
    FakeProductRepository,
)


def _catalog() -> list[Product]:
    return [
        Product(id="P1", name="Widget", price=Money.of("10"), quantity=5),
        Product(id="P2", name="Gadget", price=Money.of("20"), quantity=2),
    ]


def _setup(
    products: list[Product] | None = None,
    product_repo: FakeProductRepository | None = None,
    order_repo: FakeOrderRepository | None = None,
):
    """Build handler with fake repos: customer C1 and the P1/P2 catalog."""
    customer_repo = FakeCustomerRepository([Customer(id="C1", name="Alice")])
    if product_repo is None:
        product_repo = FakeProductRepository(_catalog() if products is None else products)
    if order_repo is None:
        order_repo = FakeOrderRepository()
    handler = PlaceOrderHandler(customer_repo, product_repo, order_repo)
    return handler, customer_repo, product_repo, order_repo


def _stock(product_repo: FakeProductRepository, product_id: str) -> int:
    return product_repo.get_by_id(product_id).quantity


class TestPlaceOrderHappyPath:

    def test_scenario_two_products(self):
        handler, _, product_repo, _ = _setup()
        order = handler.handle("C1", [
            OrderLineRequest("P1", 2),
            OrderLineRequest("P2", 1),
        ])

        assert [(l.product_id, l.quantity.value, l.price) for l in order.lines] == [
            ("P1", 2, Money.of("10")),
            ("P2", 1, Money.of("20")),
        ]
        assert _stock(product_repo, "P1") == 3
        assert _stock(product_repo, "P2") == 1

    def test_assigns_order_and_line_ids(self):
        handler, _, _, _ = _setup()
        order = handler.handle("C1", [
            OrderLineRequest("P1", 1),
            OrderLineRequest("P2", 1),
        ])
        assert order.id == 1
        assert [line.id for line in order.lines] == [1, 2]

    def test_persists_order_for_customer(self):
        handler, _, _, order_repo = _setup()
        order = handler.handle("C1", [OrderLineRequest("P1", 1)])
        saved = order_repo.get_by_id(order.id)
        assert saved is not None
        assert saved.customer.id == "C1"
        assert saved.total == Money.of("10")

    def test_total_is_sum_of_lines(self):
        handler, _, _, _ = _setup()
        order = handler.handle("C1", [
            OrderLineRequest("P1", 3),
            OrderLineRequest("P2", 2),
        ])
        assert order.total.amount == Decimal("70")

    def test_whole_stock_can_be_ordered(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("C1", [OrderLineRequest("P2", 2)])
        assert _stock(product_repo, "P2") == 0

    def test_single_batched_update_with_expected_quantities(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("C1", [
            OrderLineRequest("P1", 2),
            OrderLineRequest("P2", 1),
        ])
        assert product_repo.updates == [[
            StockUpdate("P1", quantity=3, expected_quantity=5),
            StockUpdate("P2", quantity=1, expected_quantity=2),
        ]]

    def test_distinct_ids_fetched_once_in_input_order(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("C1", [
            OrderLineRequest("P2", 1),
            OrderLineRequest("P1", 1),
            OrderLineRequest("P2", 1),
        ])
        assert product_repo.fetches == [["P2", "P1"]]


class TestPlaceOrderPriceSnapshot:

    def test_line_price_unaffected_by_later_price_change(self):
        handler, _, product_repo, order_repo = _setup()
        order = handler.handle("C1", [OrderLineRequest("P1", 1)])

        widget = product_repo.get_by_id("P1")
        widget.update_price(Money.of("99.99"))
        product_repo.save(widget)

        saved = order_repo.get_by_id(order.id)
        assert saved.lines[0].price == Money.of("10")
        assert str(saved.total) == "10.00 USD"


class TestPlaceOrderIsNotIdempotent:

    def test_placing_same_order_twice_decrements_twice(self):
        handler, _, product_repo, order_repo = _setup()
        request = [OrderLineRequest("P1", 2)]

        first = handler.handle("C1", request)
        second = handler.handle("C1", request)

        # Two distinct orders, and the stock effects accumulate
        assert first.id != second.id
        assert order_repo.get_by_id(first.id) is not None
        assert order_repo.get_by_id(second.id) is not None
        assert _stock(product_repo, "P1") == 1

    def test_third_identical_order_runs_out_of_stock(self):
        handler, _, product_repo, _ = _setup()
        request = [OrderLineRequest("P1", 2)]
        handler.handle("C1", request)
        handler.handle("C1", request)

        with pytest.raises(InsufficientStockError):
            handler.handle("C1", request)
        assert _stock(product_repo, "P1") == 1


class TestPlaceOrderCustomerResolution:

    def test_unknown_customer_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(CustomerNotFoundError) as exc_info:
            handler.handle("C404", [OrderLineRequest("P1", 1)])
        assert exc_info.value.customer_id == "C404"

    def test_unknown_customer_touches_no_other_store(self):
        handler, _, product_repo, order_repo = _setup()
        with pytest.raises(CustomerNotFoundError):
            handler.handle("C404", [OrderLineRequest("P1", 1)])
        assert product_repo.fetches == []
        assert product_repo.updates == []
        assert order_repo.list_all() == []

    def test_is_an_entity_not_found_error(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Customer 'C404' not found"):
            handler.handle("C404", [OrderLineRequest("P1", 1)])


class TestPlaceOrderCatalogResolution:

    def test_no_matching_products(self):
        handler, _, product_repo, order_repo = _setup()
        with pytest.raises(NoProductsFoundError) as exc_info:
            handler.handle("C1", [
                OrderLineRequest("P8", 1),
                OrderLineRequest("P9", 1),
            ])
        assert exc_info.value.product_ids == ["P8", "P9"]
        assert product_repo.updates == []
        assert order_repo.list_all() == []

    def test_empty_catalog(self):
        handler, _, _, _ = _setup(products=[])
        with pytest.raises(NoProductsFoundError):
            handler.handle("C1", [OrderLineRequest("P1", 1)])

    def test_unknown_product_named(self):
        handler, _, product_repo, order_repo = _setup()
        with pytest.raises(ProductNotFoundError) as exc_info:
            handler.handle("C1", [
                OrderLineRequest("P1", 1),
                OrderLineRequest("P3", 1),
            ])
        assert exc_info.value.product_id == "P3"
        assert product_repo.updates == []
        assert order_repo.list_all() == []

    def test_first_unknown_product_in_input_order_reported(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="'P7'"):
            handler.handle("C1", [
                OrderLineRequest("P7", 1),
                OrderLineRequest("P1", 1),
                OrderLineRequest("P3", 1),
            ])

    def test_existence_checked_before_stock(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            handler.handle("C1", [
                OrderLineRequest("P1", 100),
                OrderLineRequest("P3", 1),
            ])


class TestPlaceOrderStockCheck:

    def test_insufficient_stock_names_line(self):
        handler, _, product_repo, order_repo = _setup()
        request = OrderLineRequest("P2", 5)
        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("C1", [request])
        assert exc_info.value.line == request
        assert exc_info.value.available == 2
        assert product_repo.updates == []
        assert order_repo.list_all() == []
        assert _stock(product_repo, "P2") == 2

    def test_first_short_line_in_input_order_reported(self):
        handler, _, _, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("C1", [
                OrderLineRequest("P1", 1),
                OrderLineRequest("P1", 9),
                OrderLineRequest("P2", 5),
            ])
        assert exc_info.value.line == OrderLineRequest("P1", 9)

    def test_duplicate_lines_share_one_stock_figure(self):
        handler, _, product_repo, _ = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("C1", [
                OrderLineRequest("P2", 1),
                OrderLineRequest("P2", 2),
            ])
        assert exc_info.value.line == OrderLineRequest("P2", 2)
        assert exc_info.value.available == 1
        assert _stock(product_repo, "P2") == 2

    def test_duplicate_lines_within_stock_are_kept_separate(self):
        handler, _, product_repo, _ = _setup()
        order = handler.handle("C1", [
            OrderLineRequest("P2", 1),
            OrderLineRequest("P2", 1),
        ])
        assert len(order.lines) == 2
        assert _stock(product_repo, "P2") == 0
        assert product_repo.updates == [[StockUpdate("P2", 0, expected_quantity=2)]]


class TestPlaceOrderInputValidation:

    @pytest.mark.parametrize("customer_id", ["", "   "])
    def test_blank_customer_id_rejected(self, customer_id):
        handler, customer_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="Customer ID is required"):
            handler.handle(customer_id, [OrderLineRequest("P1", 1)])
        assert customer_repo.lookups == []

    def test_empty_request_rejected(self):
        handler, customer_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least one line"):
            handler.handle("C1", [])
        assert customer_repo.lookups == []

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        handler, _, product_repo, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("C1", [OrderLineRequest("P1", quantity)])
        assert product_repo.fetches == []


class _BrokenOrderRepository(FakeOrderRepository):

    def create(self, customer, lines):
        raise OSError("disk full")


class _RacingProductRepository(FakeProductRepository):
    """Sells one P1 elsewhere right after the catalog was read."""

    def find_all_by_id(self, product_ids):
        products = super().find_all_by_id(product_ids)
        self._store["P1"].quantity -= 1
        return products


class TestPlaceOrderStoreFaults:

    def test_order_store_fault_propagates_without_stock_change(self):
        handler, _, product_repo, _ = _setup(order_repo=_BrokenOrderRepository())
        with pytest.raises(OSError, match="disk full"):
            handler.handle("C1", [OrderLineRequest("P1", 1)])
        assert product_repo.updates == []
        assert _stock(product_repo, "P1") == 5

    def test_stale_stock_refused_by_store(self):
        handler, _, product_repo, order_repo = _setup(
            product_repo=_RacingProductRepository(_catalog()),
        )
        with pytest.raises(StockConflictError) as exc_info:
            handler.handle("C1", [OrderLineRequest("P1", 2)])
        assert exc_info.value.product_id == "P1"
        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 4
        assert _stock(product_repo, "P1") == 4
        # The order was written before the refused decrement and is kept
        assert [o.lines[0].product_id for o in order_repo.list_all()] == ["P1"]


class TestPlaceOrderCurrency:

    def _mixed_catalog(self) -> list[Product]:
        return [
            Product(id="P1", name="Widget", price=Money.of("10", "USD"), quantity=5),
            Product(id="P2", name="Gadget", price=Money.of("20", "EUR"), quantity=2),
        ]

    def test_mixed_currencies_rejected_before_any_write(self):
        handler, _, product_repo, order_repo = _setup(products=self._mixed_catalog())
        with pytest.raises(ValidationError, match="different currencies: USD, EUR"):
            handler.handle("C1", [
                OrderLineRequest("P1", 2),
                OrderLineRequest("P2", 1),
            ])
        assert order_repo.list_all() == []
        assert product_repo.updates == []
        assert _stock(product_repo, "P1") == 5
        assert _stock(product_repo, "P2") == 2

    def test_single_foreign_currency_accepted(self):
        handler, _, product_repo, _ = _setup(products=self._mixed_catalog())
        order = handler.handle("C1", [OrderLineRequest("P2", 2)])
        assert order.total == Money.of("40", "EUR")
        assert _stock(product_repo, "P2") == 0
