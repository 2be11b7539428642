"""CLI commands for the Customer aggregate."""

from __future__ import annotations

import click

from storefront.application.add_customer import AddCustomerHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import customer_repository


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
def customer_add(name: str) -> None:
    """Register a new customer."""
    handler = AddCustomerHandler(customer_repo=customer_repository())

    try:
        customer = handler.handle(name=name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' added")


@click.command("list")
def customer_list() -> None:
    """List registered customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30}")
    click.echo("-" * 37)
    for c in customers:
        click.echo(f"{c.id:<6} {c.name:<30}")
