"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

log = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str, quantity: int = 0) -> Product:
        """Add a new product to the catalog with its initial stock."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        all_products = self._product_repo.list_all()
        next_id = str(max((int(p.id) for p in all_products if p.id.isdigit()), default=0) + 1)

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            quantity=quantity,
        )
        self._product_repo.save(product)
        log.info("Added product #%s '%s' at %s", product.id, product.name, product.price)
        return product
