"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from stockledger.domain.service.order_workflow import OrderWorkflow
from stockledger.domain.service.reorder_monitor import ReorderMonitor
from stockledger.domain.service.stock_ledger import StockLedger
from stockledger.infrastructure.config import Settings
from stockledger.infrastructure.persistence.json_catalog_repository import (
    JsonProductRepository,
    JsonWarehouseRepository,
)
from stockledger.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockledger.infrastructure.persistence.json_stock_repository import (
    JsonStockRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def warehouse_repository() -> JsonWarehouseRepository:
    return JsonWarehouseRepository(settings().data_dir / "warehouses.json")


def stock_repository() -> JsonStockRepository:
    return JsonStockRepository(settings().data_dir / "stock.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def stock_ledger() -> StockLedger:
    cfg = settings()
    return StockLedger(
        stock_repository(),
        product_repository(),
        warehouse_repository(),
        reorder_level=cfg.reorder_level,
        reorder_quantity=cfg.reorder_quantity,
    )


def reorder_monitor() -> ReorderMonitor:
    return ReorderMonitor(stock_repository())


def order_workflow() -> OrderWorkflow:
    return OrderWorkflow(
        stock_ledger(),
        order_repository(),
        product_repository(),
        warehouse_repository(),
    )
