"""Application service: Quote Checkout use case (query).

Resolves the cart against the current catalog and computes the totals
shown on the checkout summary. Nothing is persisted.
"""

from __future__ import annotations

import logging

from ghalinino.application.dto import CartItemSpec, CheckoutQuoteDTO, QuoteLineDTO
from ghalinino.domain.exceptions import EntityNotFoundError, ValidationError
from ghalinino.domain.model.cart import CartItem, cart_subtotal
from ghalinino.domain.model.checkout import CheckoutTotals, calculate_totals
from ghalinino.domain.model.payment import PaymentMethod
from ghalinino.domain.model.shipping import (
    Governorate,
    free_shipping_progress,
    quote_shipping,
    zone_name,
)
from ghalinino.domain.model.value_objects import Language, Money, Quantity
from ghalinino.domain.model.wholesale import check_wholesale_minimum
from ghalinino.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class QuoteCheckoutHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def resolve_cart(self, item_specs: list[CartItemSpec]) -> list[CartItem]:
        """Load the current product data for every cart line."""
        if not item_specs:
            raise ValidationError("Cart is empty")

        cart: list[CartItem] = []
        for spec in item_specs:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
            if not product.is_active:
                raise ValidationError(f"Product '{product.name_fr}' is no longer available")
            cart.append(CartItem(product=product, quantity=Quantity(spec.quantity)))
        return cart

    def totals(
        self,
        cart: list[CartItem],
        governorate: Governorate | str | None,
        payment_method: PaymentMethod,
        is_wholesale: bool,
        discount: Money | None = None,
    ) -> CheckoutTotals:
        subtotal = cart_subtotal(cart, is_wholesale)
        return calculate_totals(subtotal, governorate, payment_method, is_wholesale, discount)

    def handle(
        self,
        item_specs: list[CartItemSpec],
        governorate: Governorate | str | None,
        payment_method: PaymentMethod,
        is_wholesale: bool,
        discount: str = "0",
        language: Language = Language.FR,
    ) -> CheckoutQuoteDTO:
        cart = self.resolve_cart(item_specs)
        totals = self.totals(
            cart, governorate, payment_method, is_wholesale, Money.of(discount)
        )
        logger.debug(
            "Quoted %d line(s) to %s: total %s", len(cart), governorate, totals.total
        )

        free_remaining = None
        zone = None
        if governorate is not None:
            zone = zone_name(governorate, language)
            shipping = quote_shipping(governorate, is_wholesale, totals.subtotal)
            if shipping.amount_until_free is not None:
                free_remaining = shipping.amount_until_free.format(language)

        progress = free_shipping_progress(totals.subtotal, is_wholesale)
        minimum = check_wholesale_minimum(totals.subtotal, is_wholesale)

        return CheckoutQuoteDTO(
            lines=[
                QuoteLineDTO(
                    product_id=item.product_id,
                    product_name=item.product.name(language),
                    quantity=item.quantity.value,
                    unit_price=item.unit_price(is_wholesale).format(language),
                    line_total=item.line_total(is_wholesale).format(language),
                    is_wholesale_price=item.product.uses_wholesale_price(is_wholesale),
                )
                for item in cart
            ],
            subtotal=totals.subtotal.format(language),
            shipping_fee=totals.shipping_fee.format(language),
            cod_fee=totals.cod_fee.format(language),
            discount=totals.discount.format(language),
            total=totals.total.format(language),
            shipping_zone=zone,
            free_shipping_remaining=free_remaining,
            free_shipping_percentage=(
                f"{progress.percentage}%" if progress is not None else None
            ),
            wholesale_minimum_met=minimum.minimum_met,
            wholesale_amount_short=minimum.amount_short.format(language),
        )
