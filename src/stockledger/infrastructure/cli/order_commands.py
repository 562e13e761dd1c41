"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from stockledger.application.cancel_order import CancelOrderHandler
from stockledger.application.confirm_order import ConfirmOrderHandler
from stockledger.application.create_order import CreateOrderHandler
from stockledger.application.dto import OrderDTO, OrderItemSpec
from stockledger.application.fulfill_order import ProcessOrderHandler, ShipOrderHandler
from stockledger.application.show_order import ListOrdersHandler, ShowOrderHandler
from stockledger.domain.exceptions import DomainException, RepositoryError
from stockledger.infrastructure.bootstrap import order_repository, order_workflow


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (product id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
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
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_number} (#{dto.id}, status={dto.status})")
    click.echo(f"Customer:  {dto.customer_email}")
    click.echo(f"Warehouse: {dto.warehouse_id}")
    click.echo(f"Created:   {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer email.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID to fulfil from.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(customer: str, warehouse_id: str, items: str) -> None:
    """Create an order (reserves stock for every line)."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(order_workflow())

    try:
        dto = handler.handle(customer_email=customer, warehouse_id=warehouse_id, item_specs=specs)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number, e.g. ORD-1A2B3C4D.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Pass exactly one of --id or --number.")

    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        if order_id is not None:
            dto = handler.handle(order_id)
        else:
            dto = handler.handle_by_number(order_number)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only orders of this customer email.")
@click.option("--status", default=None, help="Only orders in this status.")
def order_list(customer: str | None, status: str | None) -> None:
    """List orders."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(customer_email=customer, status=status)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<5} {'Number':<14} {'Status':<11} {'Customer':<28} {'Total':>10}")
    click.echo("-" * 72)
    for dto in orders:
        click.echo(
            f"{dto.id:<5} {dto.order_number:<14} {dto.status:<11} "
            f"{dto.customer_email:<28} {dto.total:>10}"
        )


def _transition(handler, order_id: int, done: str) -> None:
    try:
        dto = handler.handle(order_id)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Order {dto.order_number} {done} (status={dto.status}).")


@click.command("confirm")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to confirm.")
def order_confirm(order_id: int) -> None:
    """Confirm a pending order (commits its reserved stock)."""
    _transition(ConfirmOrderHandler(order_workflow()), order_id, "confirmed")


@click.command("process")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to process.")
def order_process(order_id: int) -> None:
    """Start processing a confirmed order."""
    _transition(ProcessOrderHandler(order_workflow()), order_id, "processing")


@click.command("ship")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to ship.")
def order_ship(order_id: int) -> None:
    """Mark a processing order as shipped."""
    _transition(ShipOrderHandler(order_workflow()), order_id, "shipped")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (releases reservations or restores stock)."""
    _transition(CancelOrderHandler(order_workflow()), order_id, "cancelled")
