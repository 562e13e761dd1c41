"""Abstract repositories for the catalog (products and warehouses).

The catalog is an external collaborator: the core only looks entities up
by id.  ``save`` and ``list_all`` exist so adapters and the CLI can seed
data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.product import Product
from stockledger.domain.model.warehouse import Warehouse


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: str) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse."""
