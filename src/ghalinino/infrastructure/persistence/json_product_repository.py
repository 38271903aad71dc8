"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from ghalinino.domain.model.product import CatalogProduct
from ghalinino.domain.model.value_objects import Money
from ghalinino.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> CatalogProduct | None:
        return self._load().get(product_id)

    def list_all(self) -> list[CatalogProduct]:
        return list(self._load().values())

    def save(self, product: CatalogProduct) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _money(raw: str | None) -> Money | None:
        return Money(Decimal(raw)) if raw is not None else None

    def _load(self) -> dict[str, CatalogProduct]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: CatalogProduct(
                id=item["id"],
                name_ar=item["name_ar"],
                name_fr=item["name_fr"],
                price=Money(Decimal(item["price"])),
                wholesale_price=self._money(item.get("wholesale_price")),
                compare_at_price=self._money(item.get("compare_at_price")),
                images=list(item.get("images", [])),
                stock_quantity=item.get("quantity", 0),
                is_active=item.get("is_active", True),
                wholesale_min_quantity=item.get("wholesale_min_quantity", 1),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, CatalogProduct]) -> None:
        raw = [
            {
                "id": p.id,
                "name_ar": p.name_ar,
                "name_fr": p.name_fr,
                "price": str(p.price.amount),
                "wholesale_price": str(p.wholesale_price.amount) if p.wholesale_price is not None else None,
                "compare_at_price": str(p.compare_at_price.amount) if p.compare_at_price is not None else None,
                "images": p.images,
                "quantity": p.stock_quantity,
                "is_active": p.is_active,
                "wholesale_min_quantity": p.wholesale_min_quantity,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
