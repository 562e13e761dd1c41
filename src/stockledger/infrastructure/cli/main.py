import click

from stockledger.infrastructure.bootstrap import settings
from stockledger.infrastructure.cli.catalog_commands import (
    product_add,
    product_list,
    warehouse_add,
    warehouse_list,
)
from stockledger.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_available,
    inventory_create,
    inventory_remove,
    inventory_reorder,
    inventory_show,
)
from stockledger.infrastructure.cli.order_commands import (
    order_cancel,
    order_confirm,
    order_create,
    order_list,
    order_process,
    order_ship,
    order_show,
)
from stockledger.infrastructure.logging import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """stockledger — warehouse stock reservations and order lifecycle"""
    configure_logging("DEBUG" if verbose else settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def inventory() -> None:
    """Manage stock records."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_process)
order.add_command(order_ship)
order.add_command(order_show)
inventory.add_command(inventory_add)
inventory.add_command(inventory_available)
inventory.add_command(inventory_create)
inventory.add_command(inventory_remove)
inventory.add_command(inventory_reorder)
inventory.add_command(inventory_show)
product.add_command(product_add)
product.add_command(product_list)
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_list)
