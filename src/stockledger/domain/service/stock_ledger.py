"""Domain service: Stock Ledger.

Owns the quantity / reserved-quantity pair of every StockRecord.  All
mutations are funnelled through the StockRepository's atomic conditional
updates; this service validates arguments, turns a rejected guard into the
matching domain error and logs the movement.  It never reads a record,
checks it and then writes it back as separate steps.
"""

from __future__ import annotations

import structlog

from stockledger.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from stockledger.domain.model.stock import (
    DEFAULT_REORDER_LEVEL,
    DEFAULT_REORDER_QUANTITY,
    StockRecord,
)
from stockledger.domain.repository.catalog_repository import (
    ProductRepository,
    WarehouseRepository,
)
from stockledger.domain.repository.stock_repository import StockRepository

logger = structlog.get_logger(__name__)


def _require_positive(amount: int, what: str) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise ValidationError(f"{what} amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise ValidationError(f"{what} amount must be positive, got {amount}")


class StockLedger:

    def __init__(
        self,
        stock_repo: StockRepository,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
        reorder_level: int = DEFAULT_REORDER_LEVEL,
        reorder_quantity: int = DEFAULT_REORDER_QUANTITY,
    ) -> None:
        self._stock_repo = stock_repo
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo
        self._reorder_level = reorder_level
        self._reorder_quantity = reorder_quantity

    # --- Queries ---------------------------------------------------------------

    def get(self, product_id: str, warehouse_id: str) -> StockRecord:
        record = self._stock_repo.get_by_product_and_warehouse(product_id, warehouse_id)
        if record is None:
            raise EntityNotFoundError(
                f"No stock record for product '{product_id}' "
                f"in warehouse '{warehouse_id}'"
            )
        return record

    def get_by_id(self, record_id: int) -> StockRecord:
        record = self._stock_repo.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(f"Stock record #{record_id} not found")
        return record

    def list_for_product(self, product_id: str) -> list[StockRecord]:
        return self._stock_repo.list_by_product(product_id)

    def total_available(self, product_id: str) -> int:
        """Sum of available quantity across every warehouse; 0 if none."""
        return sum(r.available_quantity for r in self._stock_repo.list_by_product(product_id))

    def items_needing_reorder(self) -> list[StockRecord]:
        return self._stock_repo.list_needing_reorder()

    # --- Creation --------------------------------------------------------------

    def create(
        self,
        product_id: str,
        warehouse_id: str,
        initial_quantity: int = 0,
        reorder_level: int | None = None,
        reorder_quantity: int | None = None,
    ) -> StockRecord:
        """Open a stock record the first time a warehouse stocks a product."""
        if not isinstance(initial_quantity, int) or initial_quantity < 0:
            raise ValidationError(
                f"Initial quantity must be a non-negative integer, got {initial_quantity!r}"
            )
        level = self._reorder_level if reorder_level is None else reorder_level
        reorder_qty = self._reorder_quantity if reorder_quantity is None else reorder_quantity
        if level < 0 or reorder_qty < 0:
            raise ValidationError("Reorder thresholds cannot be negative")

        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        if self._warehouse_repo.get_by_id(warehouse_id) is None:
            raise EntityNotFoundError(f"Warehouse not found: '{warehouse_id}'")

        record = self._stock_repo.add(
            StockRecord(
                id=None,
                product_id=product_id,
                warehouse_id=warehouse_id,
                quantity=initial_quantity,
                reorder_level=level,
                reorder_quantity=reorder_qty,
            )
        )
        logger.info(
            "Stock record created",
            record_id=record.id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=initial_quantity,
        )
        return record

    # --- Movements -------------------------------------------------------------

    def increase(self, record_id: int, amount: int) -> None:
        _require_positive(amount, "Increase")
        self._stock_repo.increase_quantity(record_id, amount)
        logger.info("Stock increased", record_id=record_id, amount=amount)

    def decrease(self, record_id: int, amount: int) -> None:
        """Remove physical units.  Reserved units cannot be removed."""
        _require_positive(amount, "Decrease")
        if not self._stock_repo.decrease_quantity(record_id, amount):
            record = self.get_by_id(record_id)
            raise InsufficientStockError(
                f"Cannot remove {amount} units from stock record #{record_id} "
                f"(have {record.available_quantity} available)"
            )
        logger.info("Stock decreased", record_id=record_id, amount=amount)

    def reserve(self, record_id: int, amount: int) -> bool:
        """Pledge units to an order.  False (and no change) if not enough available."""
        _require_positive(amount, "Reserve")
        reserved = self._stock_repo.reserve(record_id, amount)
        if reserved:
            logger.info("Stock reserved", record_id=record_id, amount=amount)
        else:
            logger.warning("Reservation rejected", record_id=record_id, amount=amount)
        return reserved

    def release(self, record_id: int, amount: int) -> None:
        """Return reserved units to available.  Over-release is rejected."""
        _require_positive(amount, "Release")
        if not self._stock_repo.release(record_id, amount):
            record = self.get_by_id(record_id)
            raise ValidationError(
                f"Cannot release {amount} units from stock record #{record_id} "
                f"(only {record.reserved_quantity} reserved)"
            )
        logger.info("Reservation released", record_id=record_id, amount=amount)

    def commit(self, record_id: int, amount: int) -> None:
        """Turn a reservation into a permanent deduction in one step."""
        _require_positive(amount, "Commit")
        if not self._stock_repo.commit(record_id, amount):
            record = self.get_by_id(record_id)
            raise ValidationError(
                f"Cannot commit {amount} units on stock record #{record_id} "
                f"(only {record.reserved_quantity} reserved)"
            )
        logger.info("Reservation committed", record_id=record_id, amount=amount)

    def uncommit(self, record_id: int, amount: int) -> None:
        """Undo a commit: quantity and reservation both grow back together."""
        _require_positive(amount, "Uncommit")
        self._stock_repo.uncommit(record_id, amount)
        logger.info("Commit reversed", record_id=record_id, amount=amount)
