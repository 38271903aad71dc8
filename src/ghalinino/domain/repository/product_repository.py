"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ghalinino.domain.model.product import CatalogProduct


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> CatalogProduct | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[CatalogProduct]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: CatalogProduct) -> None:
        """Persist a new or updated product."""
