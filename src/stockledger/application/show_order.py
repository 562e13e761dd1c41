"""Application services: order queries."""

from __future__ import annotations

from stockledger.application.dto import OrderDTO, order_to_dto
from stockledger.domain.exceptions import EntityNotFoundError, ValidationError
from stockledger.domain.model.order import OrderStatus
from stockledger.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)

    def handle_by_number(self, order_number: str) -> OrderDTO:
        order = self._order_repo.get_by_order_number(order_number.strip().upper())
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        customer_email: str | None = None,
        status: str | None = None,
    ) -> list[OrderDTO]:
        """List orders, optionally narrowed by customer and/or status."""
        wanted = _parse_status(status) if status else None

        if customer_email:
            orders = self._order_repo.list_by_customer(customer_email)
            if wanted is not None:
                orders = [o for o in orders if o.status == wanted]
        elif wanted is not None:
            orders = self._order_repo.list_by_status(wanted)
        else:
            orders = self._order_repo.list_all()

        return [order_to_dto(o) for o in orders]


def _parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown order status: '{raw}'") from None
