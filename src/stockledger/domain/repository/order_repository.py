"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.exceptions import InvalidStateError
from stockledger.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    def list_by_customer(self, customer_email: str) -> list[Order]:
        email = customer_email.strip().lower()
        return [o for o in self.list_all() if o.customer_email.lower() == email]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return [o for o in self.list_all() if o.status == status]

    @abstractmethod
    def save(self, order: Order, expected_status: OrderStatus | None = None) -> None:
        """Persist a new or updated order together with its items.

        Assigns ``order.id`` for new orders.  With ``expected_status``, the
        write only happens if the stored order still has that status, checked
        in the same unit as the write; otherwise raises InvalidStateError.
        """


def stale_status_error(order: Order, expected: OrderStatus, actual: str | None) -> InvalidStateError:
    """Error for a save whose expected status no longer matches the store."""
    return InvalidStateError(
        f"Order {order.order_number} was changed concurrently: "
        f"expected status {expected.value}, got {actual}",
        expected=expected.value,
        actual=actual,
    )
