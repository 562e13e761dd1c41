"""Domain service: Order Workflow.

Drives an Order through its lifecycle and makes the matching Stock Ledger
call for each transition:

    PENDING --confirm--> CONFIRMED --process--> PROCESSING --ship--> SHIPPED
    PENDING | CONFIRMED | PROCESSING --cancel--> CANCELLED

Placing an order is all-or-nothing: either every line is reserved and the
order is stored as PENDING, or every reservation already taken is released
before the error surfaces and nothing is stored.
"""

from __future__ import annotations

import structlog

from stockledger.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidStateError,
)
from stockledger.domain.model.order import Order, OrderLineItem, OrderStatus
from stockledger.domain.model.stock import StockRecord
from stockledger.domain.model.value_objects import Quantity
from stockledger.domain.repository.catalog_repository import (
    ProductRepository,
    WarehouseRepository,
)
from stockledger.domain.repository.order_repository import OrderRepository
from stockledger.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)

TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in TRANSITIONS[current]


class OrderWorkflow:

    def __init__(
        self,
        ledger: StockLedger,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
    ) -> None:
        self._ledger = ledger
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo

    # --- Lookup ----------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    # --- Creation --------------------------------------------------------------

    def create_order(
        self,
        customer_email: str,
        warehouse_id: str,
        lines: list[tuple[str, int]],
    ) -> Order:
        """Reserve stock for every line and store the order as PENDING.

        ``lines`` is a list of (product_id, quantity) pairs.
        """
        if self._warehouse_repo.get_by_id(warehouse_id) is None:
            raise EntityNotFoundError(f"Warehouse not found: '{warehouse_id}'")

        # Resolve everything before touching stock so lookups fail cheaply.
        items: list[OrderLineItem] = []
        records: list[StockRecord] = []
        for product_id, qty in lines:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{product_id}'")
            items.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=Quantity(qty),
                    unit_price=product.price,  # price snapshot
                )
            )
            records.append(self._ledger.get(product.id, warehouse_id))

        order = Order.create(customer_email, warehouse_id, items)

        # Check-and-reserve is one atomic call per line; False is the
        # authoritative "not enough stock" answer.
        taken: list[tuple[int, int]] = []
        try:
            for item, record in zip(items, records):
                amount = item.quantity.value
                if not self._ledger.reserve(record.id, amount):
                    current = self._ledger.get_by_id(record.id)
                    raise InsufficientStockError(
                        f"Insufficient stock for product '{item.product_name}' "
                        f"(need {amount}, have {current.available_quantity} available)"
                    )
                taken.append((record.id, amount))

            self._order_repo.save(order)
        except Exception:
            self._release_all(taken, reason="order creation failed")
            raise

        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            total=str(order.total_amount),
            lines=len(items),
        )
        return order

    # --- Transitions -----------------------------------------------------------

    def confirm_order(self, order_id: int) -> Order:
        """PENDING -> CONFIRMED.  Commits each reservation against quantity."""
        order = self.get_order(order_id)
        self._check_transition(order, OrderStatus.CONFIRMED, "confirm")

        committed: list[tuple[int, int]] = []
        try:
            for item in order.items:
                record = self._ledger.get(item.product_id, order.warehouse_id)
                self._ledger.commit(record.id, item.quantity.value)
                committed.append((record.id, item.quantity.value))

            order.mark(OrderStatus.CONFIRMED)
            self._order_repo.save(order, expected_status=OrderStatus.PENDING)
        except Exception:
            self._undo_commits(committed)
            order.status = OrderStatus.PENDING
            raise

        logger.info("Order confirmed", order_number=order.order_number)
        return order

    def process_order(self, order_id: int) -> Order:
        """CONFIRMED -> PROCESSING.  No stock effect."""
        order = self.get_order(order_id)
        self._check_transition(order, OrderStatus.PROCESSING, "process")
        order.mark(OrderStatus.PROCESSING)
        self._order_repo.save(order, expected_status=OrderStatus.CONFIRMED)
        logger.info("Order processing", order_number=order.order_number)
        return order

    def ship_order(self, order_id: int) -> Order:
        """PROCESSING -> SHIPPED.  No stock effect."""
        order = self.get_order(order_id)
        self._check_transition(order, OrderStatus.SHIPPED, "ship")
        order.mark(OrderStatus.SHIPPED)
        self._order_repo.save(order, expected_status=OrderStatus.PROCESSING)
        logger.info("Order shipped", order_number=order.order_number)
        return order

    def cancel_order(self, order_id: int) -> Order:
        """PENDING | CONFIRMED | PROCESSING -> CANCELLED.

        A PENDING order still holds reservations, which are released.  A
        CONFIRMED or PROCESSING order already had its reservations committed
        into a quantity deduction, so the quantity is restored instead.

        If a movement or the save fails, the movements already applied are
        reversed and the order keeps its status, so the call can be retried.
        """
        order = self.get_order(order_id)
        if order.status == OrderStatus.SHIPPED:
            raise InvalidStateError(
                f"Cannot cancel shipped order {order.order_number}",
                expected="PENDING, CONFIRMED or PROCESSING",
                actual=order.status.value,
            )
        self._check_transition(order, OrderStatus.CANCELLED, "cancel")

        previous = order.status
        restock = previous.has_committed_stock
        moved: list[tuple[int, int]] = []
        try:
            for item in order.items:
                record = self._ledger.get(item.product_id, order.warehouse_id)
                if restock:
                    self._ledger.increase(record.id, item.quantity.value)
                else:
                    self._ledger.release(record.id, item.quantity.value)
                moved.append((record.id, item.quantity.value))

            order.mark(OrderStatus.CANCELLED)
            self._order_repo.save(order, expected_status=previous)
        except Exception:
            self._undo_cancel(moved, restock)
            order.status = previous
            raise

        logger.info(
            "Order cancelled",
            order_number=order.order_number,
            previous_status=previous.value,
        )
        return order

    # --- Internal helpers ------------------------------------------------------

    @staticmethod
    def _check_transition(order: Order, target: OrderStatus, action: str) -> None:
        if can_transition(order.status, target):
            return
        expected = [s.value for s, allowed in TRANSITIONS.items() if target in allowed]
        raise InvalidStateError(
            f"Cannot {action} order {order.order_number}: "
            f"expected status {' or '.join(expected)}, got {order.status.value}",
            expected=" or ".join(expected),
            actual=order.status.value,
        )

    def _release_all(self, taken: list[tuple[int, int]], reason: str) -> None:
        for record_id, amount in reversed(taken):
            self._ledger.release(record_id, amount)
        if taken:
            logger.warning("Reservations rolled back", count=len(taken), reason=reason)

    def _undo_commits(self, committed: list[tuple[int, int]]) -> None:
        for record_id, amount in reversed(committed):
            self._ledger.uncommit(record_id, amount)
        if committed:
            logger.warning("Commits rolled back", count=len(committed))

    def _undo_cancel(self, moved: list[tuple[int, int]], restock: bool) -> None:
        # Released or restored units were briefly available to other orders,
        # so taking them back can be refused.
        for record_id, amount in reversed(moved):
            if restock:
                try:
                    self._ledger.decrease(record_id, amount)
                except InsufficientStockError:
                    logger.error(
                        "Could not take back restored stock after failed cancellation",
                        record_id=record_id,
                        amount=amount,
                    )
            elif not self._ledger.reserve(record_id, amount):
                logger.error(
                    "Could not restore reservation after failed cancellation",
                    record_id=record_id,
                    amount=amount,
                )
        if moved:
            logger.warning("Cancellation rolled back", count=len(moved), restock=restock)
