"""Order aggregate.

The Order owns its line items, its total and its status.  It is a data
holder: construction computes subtotals and the total once, and assigns a
human-readable order number.  Which transitions are legal, and what they
do to stock, is decided by the OrderWorkflow domain service.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.value_objects import Money, Quantity

ORDER_NUMBER_PREFIX = "ORD-"


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.SHIPPED, OrderStatus.CANCELLED)

    @property
    def has_committed_stock(self) -> bool:
        """True once confirmation has deducted physical quantity."""
        return self in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING)


@dataclass(frozen=True)
class OrderLineItem:
    """One product line, with the unit price captured at creation time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


def generate_order_number() -> str:
    return ORDER_NUMBER_PREFIX + uuid.uuid4().hex[:8].upper()


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  ``__init__`` stays plain so the
    repository can reconstitute persisted orders as they were stored
    (including ``total_amount``, which is never recomputed).
    """

    id: int | None
    order_number: str
    customer_email: str
    warehouse_id: str
    items: tuple[OrderLineItem, ...]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @staticmethod
    def create(
        customer_email: str,
        warehouse_id: str,
        items: list[OrderLineItem],
    ) -> Order:
        if not customer_email or not customer_email.strip():
            raise ValidationError("Customer email is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero(items[0].unit_price.currency)
        for item in items:
            total = total + item.subtotal

        return Order(
            id=None,
            order_number=generate_order_number(),
            customer_email=customer_email.strip(),
            warehouse_id=warehouse_id,
            items=tuple(items),
            total_amount=total,
        )

    def mark(self, status: OrderStatus) -> None:
        """Record a new status.  Legality is checked by the caller."""
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
