"""CLI commands for the local product and warehouse catalog."""

from __future__ import annotations

import click

from stockledger.application.register_catalog import (
    AddProductHandler,
    AddWarehouseHandler,
)
from stockledger.domain.exceptions import DomainException, RepositoryError
from stockledger.infrastructure.bootstrap import (
    product_repository,
    warehouse_repository,
)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--id", "product_id", default=None, help="Product ID (auto-assigned if omitted).")
@click.option("--sku", default=None, help="Stock keeping unit.")
def product_add(name: str, price: str, product_id: str | None, sku: str | None) -> None:
    """Add a product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, price=price, product_id=product_id, sku=sku)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except RepositoryError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'SKU':<12} {'Price':>10}")
    click.echo("-" * 51)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.sku or '-':<12} {str(p.price):>10}")


@click.command("add")
@click.option("--code", required=True, help="Warehouse code, e.g. WH001.")
@click.option("--name", default="", help="Display name.")
@click.option("--id", "warehouse_id", default=None, help="Warehouse ID (auto-assigned if omitted).")
def warehouse_add(code: str, name: str, warehouse_id: str | None) -> None:
    """Register a warehouse."""
    handler = AddWarehouseHandler(warehouse_repo=warehouse_repository())

    try:
        wh = handler.handle(code=code, name=name, warehouse_id=warehouse_id)
    except (DomainException, RepositoryError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{wh.id} '{wh.code}' added")


@click.command("list")
def warehouse_list() -> None:
    """List all warehouses."""
    try:
        warehouses = warehouse_repository().list_all()
    except RepositoryError as exc:
        raise click.ClickException(str(exc))

    if not warehouses:
        click.echo("No warehouses found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<20}")
    click.echo("-" * 38)
    for w in warehouses:
        click.echo(f"{w.id:<6} {w.code:<10} {w.name:<20}")
