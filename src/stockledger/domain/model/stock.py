"""StockRecord — units on hand and units pledged, per product x warehouse.

A record is a snapshot. The domain never mutates one in place: every
change goes through an atomic conditional update on the StockRepository,
which stores a fresh copy built by ``moved()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

DEFAULT_REORDER_LEVEL = 10
DEFAULT_REORDER_QUANTITY = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StockRecord:
    """Stock held for one product in one warehouse.

    Invariants:
    - ``0 <= reserved_quantity <= quantity``
    - at most one record per (product_id, warehouse_id)
    """

    id: int | None
    product_id: str
    warehouse_id: str
    quantity: int = 0
    reserved_quantity: int = 0
    reorder_level: int = DEFAULT_REORDER_LEVEL
    reorder_quantity: int = DEFAULT_REORDER_QUANTITY
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def available_quantity(self) -> int:
        return self.quantity - self.reserved_quantity

    @property
    def needs_reorder(self) -> bool:
        return self.available_quantity <= self.reorder_level

    @property
    def key(self) -> tuple[str, str]:
        return (self.product_id, self.warehouse_id)

    # --- Guards shared by every StockRepository implementation ---------------
    #
    # Each returns True when the movement is allowed on this snapshot.  The
    # repository evaluates the guard and applies the change inside one
    # critical section (or one conditional UPDATE).

    def can_decrease(self, amount: int) -> bool:
        return amount <= self.available_quantity

    def can_reserve(self, amount: int) -> bool:
        return amount <= self.available_quantity

    def can_release(self, amount: int) -> bool:
        return amount <= self.reserved_quantity

    def can_commit(self, amount: int) -> bool:
        return amount <= self.reserved_quantity

    def moved(self, quantity: int = 0, reserved: int = 0) -> StockRecord:
        """Return a copy with the deltas applied and ``updated_at`` bumped."""
        return replace(
            self,
            quantity=self.quantity + quantity,
            reserved_quantity=self.reserved_quantity + reserved,
            updated_at=_utcnow(),
        )
