"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockledger.domain.model.order import Order, OrderLineItem, OrderStatus
from stockledger.domain.model.value_objects import Money, Quantity
from stockledger.domain.repository.order_repository import OrderRepository, stale_status_error
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order, expected_status: OrderStatus | None = None) -> None:
        # The order and its items are one JSON object, written in one replace.
        # Raising inside the transaction leaves the file untouched.
        with self._file.transaction() as orders:
            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1

            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    if expected_status is not None and raw["status"] != expected_status.value:
                        raise stale_status_error(order, expected_status, raw["status"])
                    orders[i] = self._to_raw(order)
                    break
            else:
                if expected_status is not None:
                    raise stale_status_error(order, expected_status, None)
                orders.append(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_email": order.customer_email,
            "warehouse_id": order.warehouse_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat() if order.updated_at else None,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        )
        updated_at = raw.get("updated_at")
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_email=raw["customer_email"],
            warehouse_id=raw["warehouse_id"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )
