"""In-memory fakes and builders for testing.

The fakes implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.  Stock uses
the real InMemoryStockRepository, since its locking is part of what the
tests check.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from stockledger.domain.exceptions import RepositoryError
from stockledger.domain.model.order import Order, OrderStatus
from stockledger.domain.model.product import Product
from stockledger.domain.model.stock import StockRecord
from stockledger.domain.model.value_objects import Money
from stockledger.domain.model.warehouse import Warehouse
from stockledger.domain.repository.catalog_repository import (
    ProductRepository,
    WarehouseRepository,
)
from stockledger.domain.repository.order_repository import OrderRepository, stale_status_error
from stockledger.domain.service.order_workflow import OrderWorkflow
from stockledger.domain.service.stock_ledger import StockLedger
from stockledger.infrastructure.persistence.memory_stock_repository import (
    InMemoryStockRepository,
)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.fail_on_save = False
        # called at the start of save(), before the store is locked
        self.on_save = None

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return replace(order) if order is not None else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for order in self._store.values():
            if order.order_number == order_number:
                return replace(order)
        return None

    def list_all(self) -> list[Order]:
        return [replace(o) for o in self._store.values()]

    def save(self, order: Order, expected_status: OrderStatus | None = None) -> None:
        if self.on_save is not None:
            self.on_save()
        if self.fail_on_save:
            raise RepositoryError("order store unavailable")
        with self._lock:
            if expected_status is not None:
                stored = self._store.get(order.id)
                actual = stored.status.value if stored is not None else None
                if actual != expected_status.value:
                    raise stale_status_error(order, expected_status, actual)
            if order.id is None:
                order.id = self._next_id
                self._next_id += 1
            self._store[order.id] = replace(order)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products or []}

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeWarehouseRepository(WarehouseRepository):

    def __init__(self, warehouses: list[Warehouse] | None = None) -> None:
        self._store: dict[str, Warehouse] = {w.id: w for w in warehouses or []}

    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        return self._store.get(warehouse_id)

    def list_all(self) -> list[Warehouse]:
        return list(self._store.values())

    def save(self, warehouse: Warehouse) -> None:
        self._store[warehouse.id] = warehouse


class FlakyStockRepository(InMemoryStockRepository):
    """Raises RepositoryError on the Nth reserve() or release() call (1-based)."""

    def __init__(
        self,
        records: list[StockRecord] | None = None,
        fail_on_reserve: int = 0,
        fail_on_release: int = 0,
    ) -> None:
        super().__init__(records)
        self._fail_on_reserve = fail_on_reserve
        self._fail_on_release = fail_on_release
        self._reserve_calls = 0
        self._release_calls = 0

    def reserve(self, record_id: int, amount: int) -> bool:
        self._reserve_calls += 1
        if self._reserve_calls == self._fail_on_reserve:
            raise RepositoryError("connection reset")
        return super().reserve(record_id, amount)

    def release(self, record_id: int, amount: int) -> bool:
        self._release_calls += 1
        if self._release_calls == self._fail_on_release:
            raise RepositoryError("connection reset")
        return super().release(record_id, amount)


class GreedyStockRepository(InMemoryStockRepository):
    """Whenever stock comes back to a record, a rival order grabs all of it.

    Stands in for a concurrent order creation landing right after a
    rollback puts units back.  ``grabbed`` lists what the rival got.
    """

    def __init__(self, records: list[StockRecord] | None = None) -> None:
        super().__init__(records)
        self.grabbed: list[int] = []

    def _grab(self, record_id: int) -> None:
        available = self.get_by_id(record_id).available_quantity
        if available > 0 and super().reserve(record_id, available):
            self.grabbed.append(available)

    def increase_quantity(self, record_id: int, amount: int) -> bool:
        applied = super().increase_quantity(record_id, amount)
        self._grab(record_id)
        return applied

    def uncommit(self, record_id: int, amount: int) -> bool:
        applied = super().uncommit(record_id, amount)
        self._grab(record_id)
        return applied


# --- Builders -----------------------------------------------------------------


def default_products() -> list[Product]:
    return [
        Product(id="1", name="Widget", price=Money.of("15.00")),
        Product(id="2", name="Gadget", price=Money.of("25.00")),
        Product(id="3", name="Gizmo", price=Money.of("4.50")),
    ]


def default_warehouses() -> list[Warehouse]:
    return [
        Warehouse(id="WH1", code="WH001", name="Main"),
        Warehouse(id="WH2", code="WH002", name="Overflow"),
    ]


def stock(record_id, product_id, warehouse_id, quantity, reserved=0, reorder_level=10):
    return StockRecord(
        id=record_id,
        product_id=product_id,
        warehouse_id=warehouse_id,
        quantity=quantity,
        reserved_quantity=reserved,
        reorder_level=reorder_level,
    )


class World:
    """Everything a workflow test needs, wired to in-memory stores."""

    def __init__(self, records: list[StockRecord] | None = None, stock_repo=None) -> None:
        self.products = FakeProductRepository(default_products())
        self.warehouses = FakeWarehouseRepository(default_warehouses())
        self.orders = FakeOrderRepository()
        self.stock = stock_repo if stock_repo is not None else InMemoryStockRepository(records)
        self.ledger = StockLedger(self.stock, self.products, self.warehouses)
        self.workflow = OrderWorkflow(self.ledger, self.orders, self.products, self.warehouses)

    def levels(self, record_id: int) -> tuple[int, int]:
        record = self.stock.get_by_id(record_id)
        return record.quantity, record.reserved_quantity
