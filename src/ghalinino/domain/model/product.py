"""Catalog product.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are deactivated.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ghalinino.domain.exceptions import InsufficientStockError, ValidationError
from ghalinino.domain.model.value_objects import Language, Money


@dataclass
class CatalogProduct:
    """A product in the catalog, with retail and optional wholesale pricing.

    Kept as a mutable dataclass because price updates and stock
    movements are legitimate mutations on the aggregate.
    """

    id: str
    name_ar: str
    name_fr: str
    price: Money
    wholesale_price: Money | None = None
    compare_at_price: Money | None = None
    images: list[str] = field(default_factory=list)
    stock_quantity: int = 0
    is_active: bool = True
    wholesale_min_quantity: int = 1

    def name(self, language: Language) -> str:
        return self.name_ar if language is Language.AR else self.name_fr

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None

    @property
    def is_discounted(self) -> bool:
        return self.compare_at_price is not None and self.compare_at_price > self.price

    def uses_wholesale_price(self, is_wholesale: bool) -> bool:
        """True when a wholesale-eligible account buys a product that has a wholesale price."""
        return is_wholesale and self.wholesale_price is not None

    def unit_price_for(self, is_wholesale: bool) -> Money:
        if self.uses_wholesale_price(is_wholesale):
            return self.wholesale_price  # type: ignore[return-value]
        return self.price

    def remove_stock(self, quantity: int) -> None:
        """Permanently deduct sold units from stock."""
        if quantity <= 0:
            raise ValidationError("Stock deduction must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(self.id, quantity, self.stock_quantity)
        self.stock_quantity -= quantity
