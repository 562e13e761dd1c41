"""In-process implementation of StockRepository.

Records live in a dict keyed by id and are only ever handed out as
copies.  Each record has its own lock; a conditional update evaluates its
guard and stores the new snapshot while holding that lock, so concurrent
updates to one record serialize while different records never contend.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import replace

from stockledger.domain.exceptions import ConflictError, EntityNotFoundError
from stockledger.domain.model.stock import StockRecord
from stockledger.domain.repository.stock_repository import StockRepository


class InMemoryStockRepository(StockRepository):

    def __init__(self, records: list[StockRecord] | None = None) -> None:
        self._records: dict[int, StockRecord] = {}
        self._by_key: dict[tuple[str, str], int] = {}
        self._locks: dict[int, threading.Lock] = {}
        self._index_lock = threading.Lock()
        self._next_id = 1
        for record in records or []:
            self.add(record)

    # --- Queries ---------------------------------------------------------------

    def get_by_id(self, record_id: int) -> StockRecord | None:
        record = self._records.get(record_id)
        return replace(record) if record is not None else None

    def get_by_product_and_warehouse(
        self, product_id: str, warehouse_id: str
    ) -> StockRecord | None:
        record_id = self._by_key.get((product_id, warehouse_id))
        if record_id is None:
            return None
        return self.get_by_id(record_id)

    def list_by_product(self, product_id: str) -> list[StockRecord]:
        return [replace(r) for r in list(self._records.values()) if r.product_id == product_id]

    def list_all(self) -> list[StockRecord]:
        return [replace(r) for r in list(self._records.values())]

    # --- Creation --------------------------------------------------------------

    def add(self, record: StockRecord) -> StockRecord:
        with self._index_lock:
            if record.key in self._by_key:
                raise ConflictError(
                    f"Stock record for product '{record.product_id}' in "
                    f"warehouse '{record.warehouse_id}' already exists"
                )
            if record.id in self._records:
                raise ConflictError(f"Stock record #{record.id} already exists")
            if record.id is None:
                record.id = self._next_id
            self._next_id = max(self._next_id, record.id) + 1
            self._locks[record.id] = threading.Lock()
            self._records[record.id] = replace(record)
            self._by_key[record.key] = record.id
        return record

    # --- Atomic conditional updates -------------------------------------------

    def increase_quantity(self, record_id: int, amount: int) -> bool:
        return self._update(record_id, lambda r: True, lambda r: r.moved(quantity=amount))

    def decrease_quantity(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id, lambda r: r.can_decrease(amount), lambda r: r.moved(quantity=-amount)
        )

    def reserve(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id, lambda r: r.can_reserve(amount), lambda r: r.moved(reserved=amount)
        )

    def release(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id, lambda r: r.can_release(amount), lambda r: r.moved(reserved=-amount)
        )

    def commit(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id,
            lambda r: r.can_commit(amount),
            lambda r: r.moved(quantity=-amount, reserved=-amount),
        )

    def uncommit(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id, lambda r: True, lambda r: r.moved(quantity=amount, reserved=amount)
        )

    def _update(
        self,
        record_id: int,
        guard: Callable[[StockRecord], bool],
        apply: Callable[[StockRecord], StockRecord],
    ) -> bool:
        lock = self._locks.get(record_id)
        if lock is None:
            raise EntityNotFoundError(f"Stock record #{record_id} not found")
        with lock:
            record = self._records[record_id]
            if not guard(record):
                return False
            self._records[record_id] = apply(record)
            return True
