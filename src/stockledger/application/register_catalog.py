"""Application services: register catalog entries (products, warehouses).

The catalog belongs to another system; these exist so the CLI can seed
the local JSON stores.
"""

from __future__ import annotations

from stockledger.domain.exceptions import ConflictError
from stockledger.domain.model.product import Product
from stockledger.domain.model.value_objects import Money
from stockledger.domain.model.warehouse import Warehouse
from stockledger.domain.repository.catalog_repository import (
    ProductRepository,
    WarehouseRepository,
)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        product_id: str | None = None,
        sku: str | None = None,
    ) -> Product:
        if product_id is None:
            product_id = _next_numeric_id(p.id for p in self._product_repo.list_all())
        elif self._product_repo.get_by_id(product_id) is not None:
            raise ConflictError(f"Product '{product_id}' already exists")

        product = Product(id=product_id, name=name.strip(), price=Money.of(price), sku=sku)
        self._product_repo.save(product)
        return product


class AddWarehouseHandler:

    def __init__(self, warehouse_repo: WarehouseRepository) -> None:
        self._warehouse_repo = warehouse_repo

    def handle(self, code: str, name: str = "", warehouse_id: str | None = None) -> Warehouse:
        existing = self._warehouse_repo.list_all()
        if any(w.code.lower() == code.strip().lower() for w in existing):
            raise ConflictError(f"Warehouse code '{code}' already exists")
        if warehouse_id is None:
            warehouse_id = _next_numeric_id(w.id for w in existing)
        elif self._warehouse_repo.get_by_id(warehouse_id) is not None:
            raise ConflictError(f"Warehouse '{warehouse_id}' already exists")

        warehouse = Warehouse(id=warehouse_id, code=code.strip(), name=name.strip())
        self._warehouse_repo.save(warehouse)
        return warehouse


def _next_numeric_id(ids) -> str:
    numeric = [int(i) for i in ids if str(i).isdigit()]
    return str(max(numeric, default=0) + 1)
