"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.model.order import Order
from stockledger.domain.model.stock import StockRecord


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_number: str
    customer_email: str
    warehouse_id: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class StockRecordDTO:
    id: int
    product_id: str
    warehouse_id: str
    quantity: int
    reserved: int
    available: int
    reorder_level: int
    reorder_quantity: int


@dataclass(frozen=True)
class ReorderLineDTO:
    record: StockRecordDTO
    shortfall: int
    suggested_quantity: int


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_email=order.customer_email,
        warehouse_id=order.warehouse_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def stock_to_dto(record: StockRecord) -> StockRecordDTO:
    return StockRecordDTO(
        id=record.id,  # type: ignore[arg-type]
        product_id=record.product_id,
        warehouse_id=record.warehouse_id,
        quantity=record.quantity,
        reserved=record.reserved_quantity,
        available=record.available_quantity,
        reorder_level=record.reorder_level,
        reorder_quantity=record.reorder_quantity,
    )
