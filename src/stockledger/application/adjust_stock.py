"""Application services: receive and remove physical stock."""

from __future__ import annotations

from stockledger.application.dto import StockRecordDTO, stock_to_dto
from stockledger.domain.service.stock_ledger import StockLedger


class AddStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(self, record_id: int, amount: int) -> StockRecordDTO:
        self._ledger.increase(record_id, amount)
        return stock_to_dto(self._ledger.get_by_id(record_id))


class RemoveStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(self, record_id: int, amount: int) -> StockRecordDTO:
        """Remove units that are not pledged to any order."""
        self._ledger.decrease(record_id, amount)
        return stock_to_dto(self._ledger.get_by_id(record_id))
