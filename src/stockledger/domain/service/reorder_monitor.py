"""Domain service: Reorder Monitor.

Read-only.  Results are a snapshot and may lag in-flight reservations.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from stockledger.domain.model.stock import StockRecord
from stockledger.domain.repository.stock_repository import StockRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReorderSuggestion:
    record: StockRecord
    shortfall: int  # units below (or at) the reorder level, 0 when exactly at it
    suggested_quantity: int


class ReorderMonitor:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def items_needing_reorder(self) -> list[StockRecord]:
        return self._stock_repo.list_needing_reorder()

    def report(self) -> list[ReorderSuggestion]:
        suggestions = [
            ReorderSuggestion(
                record=record,
                shortfall=max(record.reorder_level - record.available_quantity, 0),
                suggested_quantity=record.reorder_quantity,
            )
            for record in self.items_needing_reorder()
        ]
        logger.debug("Reorder report built", count=len(suggestions))
        return suggestions
