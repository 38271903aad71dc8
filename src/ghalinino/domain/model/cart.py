"""Cart line items as handed over by the storefront."""

from __future__ import annotations

from dataclasses import dataclass

from ghalinino.domain.model.product import CatalogProduct
from ghalinino.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartItem:
    """A product and how many units of it the customer wants.

    ``product`` carries the price fields as they were fetched right before
    checkout.
    """

    product: CatalogProduct
    quantity: Quantity

    @property
    def product_id(self) -> str:
        return self.product.id

    def unit_price(self, is_wholesale: bool) -> Money:
        return self.product.unit_price_for(is_wholesale)

    def line_total(self, is_wholesale: bool) -> Money:
        return self.unit_price(is_wholesale) * self.quantity.value


def cart_subtotal(items: list[CartItem], is_wholesale: bool) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total(is_wholesale)
    return result
