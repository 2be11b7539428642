"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderLineRequest, order_to_dto
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository, place_order_handler


def _parse_items(raw: str) -> list[OrderLineRequest]:
    """Parse '1:3,2:5' (product id : quantity) into OrderLineRequest list."""
    requests: list[OrderLineRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        requests.append(OrderLineRequest(product_id=product_id.strip(), quantity=qty))
    return requests


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Customer: {dto.customer_name} (#{dto.customer_id})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Line':<5} {'Product':<10} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*52}")
    for line in dto.lines:
        click.echo(
            f"  {line.id:<5} {line.product_id:<10} {line.quantity:>5} "
            f"{line.price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*52}")
    click.echo(f"  {'Order Total':<22} {dto.total:>30}")


@click.command("place")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_place(customer_id: str, items: str) -> None:
    """Place an order (checks stock, snapshots prices, decrements stock)."""
    requests = _parse_items(items)

    try:
        order = place_order_handler().handle(customer_id, requests)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    dto = order_to_dto(order)
    click.echo(f"Order #{dto.id} placed")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id}")
    _display_order(dto)
