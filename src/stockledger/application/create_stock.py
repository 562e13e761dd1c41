"""Application service: open a stock record for a product in a warehouse."""

from __future__ import annotations

from stockledger.application.dto import StockRecordDTO, stock_to_dto
from stockledger.domain.service.stock_ledger import StockLedger


class CreateStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        reorder_level: int | None = None,
        reorder_quantity: int | None = None,
    ) -> StockRecordDTO:
        record = self._ledger.create(
            product_id,
            warehouse_id,
            quantity,
            reorder_level=reorder_level,
            reorder_quantity=reorder_quantity,
        )
        return stock_to_dto(record)
