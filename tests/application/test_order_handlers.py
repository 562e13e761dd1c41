"""Integration tests for the order use cases.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from stockledger.application.cancel_order import CancelOrderHandler
from stockledger.application.confirm_order import ConfirmOrderHandler
from stockledger.application.create_order import CreateOrderHandler
from stockledger.application.dto import OrderItemSpec
from stockledger.application.fulfill_order import ProcessOrderHandler, ShipOrderHandler
from stockledger.application.show_order import ListOrdersHandler, ShowOrderHandler
from stockledger.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidStateError,
    ValidationError,
)
from tests.fakes import World, stock


def _setup() -> World:
    return World([stock(1, "1", "WH1", 100), stock(2, "2", "WH1", 50)])


def _create(world: World, email="alice@example.com", items=None):
    handler = CreateOrderHandler(world.workflow)
    return handler.handle(
        email, "WH1", items or [OrderItemSpec("1", 3), OrderItemSpec("2", 5)]
    )


class TestCreateOrderHandler:

    def test_returns_dto(self):
        world = _setup()
        dto = _create(world)
        assert dto.id == 1
        assert dto.status == "PENDING"
        assert dto.total == "$170.00"
        assert dto.order_number.startswith("ORD-")
        assert [(i.product_name, i.quantity, i.subtotal) for i in dto.items] == [
            ("Widget", 3, "$45.00"),
            ("Gadget", 5, "$125.00"),
        ]

    def test_sequential_ids(self):
        world = _setup()
        first = _create(world)
        second = _create(world, "bob@example.com")
        assert second.id == first.id + 1
        assert second.order_number != first.order_number

    def test_no_items_rejected(self):
        world = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            CreateOrderHandler(world.workflow).handle("alice@example.com", "WH1", [])

    def test_shortfall_leaves_stock_untouched(self):
        world = _setup()
        with pytest.raises(InsufficientStockError):
            _create(world, items=[OrderItemSpec("1", 5), OrderItemSpec("2", 200)])
        assert world.levels(1) == (100, 0)


class TestLifecycleHandlers:

    def test_confirm_process_ship(self):
        world = _setup()
        dto = _create(world)

        assert ConfirmOrderHandler(world.workflow).handle(dto.id).status == "CONFIRMED"
        assert ProcessOrderHandler(world.workflow).handle(dto.id).status == "PROCESSING"
        assert ShipOrderHandler(world.workflow).handle(dto.id).status == "SHIPPED"
        assert world.levels(1) == (97, 0)

    def test_cancel_confirmed_restores_stock(self):
        world = _setup()
        dto = _create(world)
        ConfirmOrderHandler(world.workflow).handle(dto.id)

        cancelled = CancelOrderHandler(world.workflow).handle(dto.id)

        assert cancelled.status == "CANCELLED"
        assert world.levels(1) == (100, 0)
        assert world.levels(2) == (50, 0)

    def test_ship_pending_rejected(self):
        world = _setup()
        dto = _create(world)
        with pytest.raises(InvalidStateError):
            ShipOrderHandler(world.workflow).handle(dto.id)

    def test_missing_order(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError):
            CancelOrderHandler(world.workflow).handle(42)


class TestOrderQueries:

    def test_show_by_id_and_number(self):
        world = _setup()
        dto = _create(world)
        handler = ShowOrderHandler(world.orders)

        assert handler.handle(dto.id).order_number == dto.order_number
        assert handler.handle_by_number(dto.order_number.lower()).id == dto.id

    def test_show_missing(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(world.orders).handle(7)
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(world.orders).handle_by_number("ORD-00000000")

    def test_list_filters(self):
        world = _setup()
        a = _create(world, "alice@example.com", [OrderItemSpec("1", 1)])
        _create(world, "bob@example.com", [OrderItemSpec("1", 1)])
        c = _create(world, "alice@example.com", [OrderItemSpec("2", 1)])
        ConfirmOrderHandler(world.workflow).handle(c.id)
        handler = ListOrdersHandler(world.orders)

        assert len(handler.handle()) == 3
        assert [o.id for o in handler.handle(customer_email="ALICE@example.com")] == [a.id, c.id]
        assert [o.id for o in handler.handle(status="confirmed")] == [c.id]
        assert [o.id for o in handler.handle(customer_email="alice@example.com", status="PENDING")] == [a.id]

    def test_unknown_status_rejected(self):
        world = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            ListOrdersHandler(world.orders).handle(status="lost")
