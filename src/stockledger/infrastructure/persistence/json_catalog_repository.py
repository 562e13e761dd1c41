"""JSON-file-backed implementations of ProductRepository and WarehouseRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.model.warehouse import Warehouse
from stockledger.domain.repository.catalog_repository import (
    ProductRepository,
    WarehouseRepository,
)
from stockledger.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            _upsert(records, self._to_raw(product))

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "price": str(product.price.amount),
            "currency": product.price.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw.get("sku"),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
        )


class JsonWarehouseRepository(WarehouseRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        for raw in self._file.load():
            if raw["id"] == warehouse_id:
                return Warehouse(id=raw["id"], code=raw["code"], name=raw.get("name", ""))
        return None

    def list_all(self) -> list[Warehouse]:
        return [
            Warehouse(id=raw["id"], code=raw["code"], name=raw.get("name", ""))
            for raw in self._file.load()
        ]

    def save(self, warehouse: Warehouse) -> None:
        with self._file.transaction() as records:
            _upsert(records, {"id": warehouse.id, "code": warehouse.code, "name": warehouse.name})


def _upsert(records: list[dict], raw: dict) -> None:
    for i, existing in enumerate(records):
        if existing["id"] == raw["id"]:
            records[i] = raw
            return
    records.append(raw)
