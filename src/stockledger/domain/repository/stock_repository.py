"""Abstract repository for StockRecord.

Unlike the other repositories there is no generic ``save``: records are
addressed by id and changed only through the conditional updates below.
Each update must run as one atomic unit against the stored record (a
single conditional UPDATE, or one critical section for in-process stores),
so a concurrent caller can never observe the read and the write apart.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.stock import StockRecord


class StockRepository(ABC):

    # --- Queries ---------------------------------------------------------------

    @abstractmethod
    def get_by_id(self, record_id: int) -> StockRecord | None:
        """Return a snapshot of the record, or None."""

    @abstractmethod
    def get_by_product_and_warehouse(
        self, product_id: str, warehouse_id: str
    ) -> StockRecord | None:
        """Return the record for the pair, or None."""

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[StockRecord]:
        """Return every record holding the product, across warehouses."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return every record."""

    def list_needing_reorder(self) -> list[StockRecord]:
        """Return records whose available quantity is at or below reorder level."""
        return [record for record in self.list_all() if record.needs_reorder]

    # --- Creation --------------------------------------------------------------

    @abstractmethod
    def add(self, record: StockRecord) -> StockRecord:
        """Insert a new record and assign its id.

        Raises ConflictError if a record for the same pair already exists.
        """

    # --- Atomic conditional updates -------------------------------------------
    #
    # Each returns True if the change was applied, False if its guard
    # rejected it (state unchanged).  Raise EntityNotFoundError for an
    # unknown record id.

    @abstractmethod
    def increase_quantity(self, record_id: int, amount: int) -> bool:
        """quantity += amount, unconditionally."""

    @abstractmethod
    def decrease_quantity(self, record_id: int, amount: int) -> bool:
        """quantity -= amount, only if amount <= available quantity."""

    @abstractmethod
    def reserve(self, record_id: int, amount: int) -> bool:
        """reserved += amount, only if amount <= available quantity."""

    @abstractmethod
    def release(self, record_id: int, amount: int) -> bool:
        """reserved -= amount, only if amount <= reserved quantity."""

    @abstractmethod
    def commit(self, record_id: int, amount: int) -> bool:
        """quantity -= amount and reserved -= amount together.

        Only if amount <= reserved quantity.  Available quantity is
        unchanged.
        """

    @abstractmethod
    def uncommit(self, record_id: int, amount: int) -> bool:
        """quantity += amount and reserved += amount together, unconditionally.

        Reverses a commit in one step, so the restored units are never
        available to another reservation in between.
        """
