"""Application services: stock level queries."""

from __future__ import annotations

from stockledger.application.dto import ReorderLineDTO, StockRecordDTO, stock_to_dto
from stockledger.domain.repository.stock_repository import StockRepository
from stockledger.domain.service.reorder_monitor import ReorderMonitor
from stockledger.domain.service.stock_ledger import StockLedger


class ShowInventoryHandler:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, product_id: str | None = None) -> list[StockRecordDTO]:
        if product_id:
            records = self._stock_repo.list_by_product(product_id)
        else:
            records = self._stock_repo.list_all()
        return [stock_to_dto(r) for r in records]


class TotalAvailableHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(self, product_id: str) -> int:
        return self._ledger.total_available(product_id)


class ReorderReportHandler:

    def __init__(self, monitor: ReorderMonitor) -> None:
        self._monitor = monitor

    def handle(self) -> list[ReorderLineDTO]:
        return [
            ReorderLineDTO(
                record=stock_to_dto(s.record),
                shortfall=s.shortfall,
                suggested_quantity=s.suggested_quantity,
            )
            for s in self._monitor.report()
        ]
