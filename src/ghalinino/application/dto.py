"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any other front end) and the
application layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer put in the cart (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class QuoteLineDTO:
    """Output: a single cart line as displayed at checkout."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "12.500 TND"
    line_total: str
    is_wholesale_price: bool


@dataclass(frozen=True)
class CheckoutQuoteDTO:
    """Output: everything the checkout summary shows before submission."""

    lines: list[QuoteLineDTO]
    subtotal: str
    shipping_fee: str
    cod_fee: str
    discount: str
    total: str
    shipping_zone: str | None
    free_shipping_remaining: str | None
    free_shipping_percentage: str | None  # wholesale only, e.g. "35.7%"
    wholesale_minimum_met: bool
    wholesale_amount_short: str


class OrderErrorKind(Enum):
    INSUFFICIENT_STOCK = "insufficient_stock"
    VALIDATION = "validation"
    ORDER_FAILED = "order_failed"


@dataclass(frozen=True)
class OrderResult:
    """Outcome of an order submission.

    Either ``success`` with ``order_id`` and ``order_number``, or a failure
    with ``error_kind`` and a user-facing ``error`` message.
    """

    success: bool
    order_id: str | None = None
    order_number: str | None = None
    error_kind: OrderErrorKind | None = None
    error: str | None = None

    @staticmethod
    def ok(order_id: str, order_number: str) -> OrderResult:
        return OrderResult(success=True, order_id=order_id, order_number=order_number)

    @staticmethod
    def failed(kind: OrderErrorKind, error: str) -> OrderResult:
        return OrderResult(success=False, error_kind=kind, error=error)
