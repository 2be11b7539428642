import click

from storefront.infrastructure.cli.customer_commands import customer_add, customer_list
from storefront.infrastructure.cli.order_commands import order_place, order_show
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
    product_update,
)
from storefront.infrastructure.logging_config import setup_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Storefront — customers, catalog and order placement"""
    setup_logging(verbose)


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


# Register subcommands
customer.add_command(customer_add)
customer.add_command(customer_list)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
order.add_command(order_place)
order.add_command(order_show)
