"""CLI commands for stock records."""

from __future__ import annotations

import click

from stockledger.application.adjust_stock import AddStockHandler, RemoveStockHandler
from stockledger.application.create_stock import CreateStockHandler
from stockledger.application.dto import StockRecordDTO
from stockledger.application.show_inventory import (
    ReorderReportHandler,
    ShowInventoryHandler,
    TotalAvailableHandler,
)
from stockledger.domain.exceptions import DomainException, RepositoryError
from stockledger.infrastructure.bootstrap import (
    reorder_monitor,
    stock_ledger,
    stock_repository,
)

_HEADER = (
    f"{'ID':<5} {'Product':<10} {'Warehouse':<10} {'Qty':>7} "
    f"{'Reserved':>9} {'Available':>10} {'Reorder@':>9}"
)


def _row(r: StockRecordDTO) -> str:
    return (
        f"{r.id:<5} {r.product_id:<10} {r.warehouse_id:<10} {r.quantity:>7} "
        f"{r.reserved:>9} {r.available:>10} {r.reorder_level:>9}"
    )


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--quantity", default=0, show_default=True, type=int, help="Initial units on hand.")
@click.option("--reorder-level", type=int, default=None, help="Reorder when available drops to this.")
@click.option("--reorder-quantity", type=int, default=None, help="Units to reorder.")
def inventory_create(
    product_id: str,
    warehouse_id: str,
    quantity: int,
    reorder_level: int | None,
    reorder_quantity: int | None,
) -> None:
    """Open a stock record for a product in a warehouse."""
    handler = CreateStockHandler(stock_ledger())

    try:
        dto = handler.handle(
            product_id, warehouse_id, quantity,
            reorder_level=reorder_level, reorder_quantity=reorder_quantity,
        )
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock record #{dto.id} created with {dto.quantity} units")


@click.command("add")
@click.option("--id", "record_id", required=True, type=int, help="Stock record ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def inventory_add(record_id: int, quantity: int) -> None:
    """Receive units into a stock record."""
    try:
        dto = AddStockHandler(stock_ledger()).handle(record_id, quantity)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock record #{dto.id}: {dto.quantity} on hand, {dto.available} available")


@click.command("remove")
@click.option("--id", "record_id", required=True, type=int, help="Stock record ID.")
@click.option("--quantity", required=True, type=int, help="Units to remove.")
def inventory_remove(record_id: int, quantity: int) -> None:
    """Remove unreserved units from a stock record."""
    try:
        dto = RemoveStockHandler(stock_ledger()).handle(record_id, quantity)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock record #{dto.id}: {dto.quantity} on hand, {dto.available} available")


@click.command("show")
@click.option("--product", "product_id", default=None, help="Only records of this product.")
def inventory_show(product_id: str | None) -> None:
    """Show current stock levels."""
    try:
        lines = ShowInventoryHandler(stock_repository()).handle(product_id)
    except RepositoryError as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(_HEADER)
    click.echo("-" * len(_HEADER))
    for line in lines:
        click.echo(_row(line))


@click.command("available")
@click.option("--product", "product_id", required=True, help="Product ID.")
def inventory_available(product_id: str) -> None:
    """Total available units of a product across warehouses."""
    try:
        total = TotalAvailableHandler(stock_ledger()).handle(product_id)
    except RepositoryError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_id}': {total} available")


@click.command("reorder")
def inventory_reorder() -> None:
    """List stock records at or below their reorder level."""
    try:
        lines = ReorderReportHandler(reorder_monitor()).handle()
    except RepositoryError as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("Nothing needs reordering.")
        return

    click.echo(f"{_HEADER} {'Suggest':>8}")
    click.echo("-" * (len(_HEADER) + 9))
    for line in lines:
        click.echo(f"{_row(line.record)} {line.suggested_quantity:>8}")
