"""Application service: Add Product use case."""

from __future__ import annotations

from ghalinino.domain.exceptions import ValidationError
from ghalinino.domain.model.product import CatalogProduct
from ghalinino.domain.model.value_objects import Money
from ghalinino.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name_fr: str,
        name_ar: str,
        price: str,
        stock: int,
        wholesale_price: str | None = None,
        images: list[str] | None = None,
        wholesale_min_quantity: int = 1,
        compare_at_price: str | None = None,
    ) -> CatalogProduct:
        """Add a new product to the catalog."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name_fr.strip() or not name_ar.strip():
            raise ValidationError("Product name is required in both languages")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        if wholesale_min_quantity < 1:
            raise ValidationError("Wholesale minimum quantity must be at least 1")
        if self._product_repo.get_by_id(product_id) is not None:
            raise ValidationError(f"Product '{product_id}' already exists")

        retail = Money.of(price)
        if retail.is_zero:
            raise ValidationError("Product price must be greater than zero")

        wholesale = Money.of(wholesale_price) if wholesale_price is not None else None
        if wholesale is not None and wholesale > retail:
            raise ValidationError("Wholesale price cannot exceed the retail price")

        compare_at = Money.of(compare_at_price) if compare_at_price is not None else None

        product = CatalogProduct(
            id=product_id.strip(),
            name_ar=name_ar.strip(),
            name_fr=name_fr.strip(),
            price=retail,
            wholesale_price=wholesale,
            compare_at_price=compare_at,
            images=list(images or []),
            stock_quantity=stock,
            wholesale_min_quantity=wholesale_min_quantity,
        )
        self._product_repo.save(product)
        return product
