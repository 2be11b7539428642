"""Application service: Add Customer use case."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.customer import Customer
from storefront.domain.repository.customer_repository import CustomerRepository


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, name: str) -> Customer:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")

        # Auto-assign ID after the highest numeric one
        existing = self._customer_repo.list_all()
        next_id = str(max((int(c.id) for c in existing if c.id.isdigit()), default=0) + 1)

        customer = Customer(id=next_id, name=name.strip())
        self._customer_repo.save(customer)
        return customer
