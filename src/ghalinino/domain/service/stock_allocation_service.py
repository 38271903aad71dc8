"""Domain service: Stock Allocation.

Checks that every line item of an order can be served from stock and
deducts the sold units. It lives in the domain layer because the rules
(product must exist, be active and have enough units) are core business
rules, not just orchestration.

The two-phase approach (validate-then-mutate) ensures stock is never left
partially decremented when one product fails validation.
"""

from __future__ import annotations

from collections.abc import Sequence

from ghalinino.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from ghalinino.domain.model.order import OrderLineItem
from ghalinino.domain.model.product import CatalogProduct
from ghalinino.domain.repository.product_repository import ProductRepository

Allocation = list[tuple[CatalogProduct, int]]


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_availability(self, items: Sequence[OrderLineItem]) -> Allocation:
        """Phase 1: load and validate every product, mutate nothing.

        Quantities of repeated products are summed before comparing with
        stock.
        """
        requested: dict[str, int] = {}
        for line in items:
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity.value

        allocation: Allocation = []
        for product_id, qty in requested.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product {product_id} not found")
            if not product.is_active:
                raise ValidationError(f"Product {product_id} is not active")
            if qty > product.stock_quantity:
                raise InsufficientStockError(product_id, qty, product.stock_quantity)
            allocation.append((product, qty))
        return allocation

    def apply(self, allocation: Allocation) -> None:
        """Phase 2: deduct the validated quantities and persist."""
        for product, qty in allocation:
            product.remove_stock(qty)
            self._product_repo.save(product)
