"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from stockledger.domain.exceptions import ConflictError, EntityNotFoundError
from stockledger.domain.model.stock import StockRecord
from stockledger.domain.repository.stock_repository import StockRepository
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonStockRepository(StockRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- Queries ---------------------------------------------------------------

    def get_by_id(self, record_id: int) -> StockRecord | None:
        for raw in self._file.load():
            if raw["id"] == record_id:
                return self._to_domain(raw)
        return None

    def get_by_product_and_warehouse(
        self, product_id: str, warehouse_id: str
    ) -> StockRecord | None:
        for raw in self._file.load():
            if raw["product_id"] == product_id and raw["warehouse_id"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_by_product(self, product_id: str) -> list[StockRecord]:
        return [self._to_domain(raw) for raw in self._file.load() if raw["product_id"] == product_id]

    def list_all(self) -> list[StockRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    # --- Creation --------------------------------------------------------------

    def add(self, record: StockRecord) -> StockRecord:
        with self._file.transaction() as records:
            for raw in records:
                if (raw["product_id"], raw["warehouse_id"]) == record.key:
                    raise ConflictError(
                        f"Stock record for product '{record.product_id}' in "
                        f"warehouse '{record.warehouse_id}' already exists"
                    )
            record.id = max((raw["id"] for raw in records), default=0) + 1
            records.append(self._to_raw(record))
        return record

    # --- Atomic conditional updates -------------------------------------------

    def increase_quantity(self, record_id: int, amount: int) -> bool:
        return self._update(record_id, lambda r: True, lambda r: r.moved(quantity=amount))

    def decrease_quantity(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id,
            lambda r: r.can_decrease(amount),
            lambda r: r.moved(quantity=-amount),
        )

    def reserve(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id,
            lambda r: r.can_reserve(amount),
            lambda r: r.moved(reserved=amount),
        )

    def release(self, record_id: int, amount: int) -> bool:
        return self._update(
            record_id,
            lambda r: r.can_release(amount),
            lambda r: r.moved(reserved=-amount),
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
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] != record_id:
                    continue
                record = self._to_domain(raw)
                if not guard(record):
                    return False
                records[i] = self._to_raw(apply(record))
                return True
        raise EntityNotFoundError(f"Stock record #{record_id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: StockRecord) -> dict:
        return {
            "id": record.id,
            "product_id": record.product_id,
            "warehouse_id": record.warehouse_id,
            "quantity": record.quantity,
            "reserved_quantity": record.reserved_quantity,
            "reorder_level": record.reorder_level,
            "reorder_quantity": record.reorder_quantity,
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockRecord:
        return StockRecord(
            id=raw["id"],
            product_id=raw["product_id"],
            warehouse_id=raw["warehouse_id"],
            quantity=raw["quantity"],
            reserved_quantity=raw.get("reserved_quantity", 0),
            reorder_level=raw["reorder_level"],
            reorder_quantity=raw["reorder_quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

