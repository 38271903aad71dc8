"""Checkout totals: subtotal, shipping, COD surcharge and discount."""

from __future__ import annotations

from dataclasses import dataclass

from ghalinino.domain.model.payment import PaymentMethod, cod_fee
from ghalinino.domain.model.shipping import Governorate, shipping_fee
from ghalinino.domain.model.value_objects import Money


@dataclass(frozen=True)
class CheckoutTotals:
    """Immutable snapshot of the amounts shown at checkout.

    Invariant: ``total == max(0, subtotal + shipping_fee + cod_fee - discount)``.
    """

    subtotal: Money
    shipping_fee: Money
    cod_fee: Money
    discount: Money
    total: Money


def calculate_totals(
    subtotal: Money,
    governorate: Governorate | str | None,
    payment_method: PaymentMethod,
    is_wholesale: bool,
    discount: Money | None = None,
) -> CheckoutTotals:
    """Compute the checkout totals.

    Without a governorate the shipping fee is zero, which lets the cart show
    a partial total before the shipping step. Callers recompute once the
    destination is known.
    """
    discount = discount if discount is not None else Money.zero()
    fee = (
        shipping_fee(governorate, is_wholesale, subtotal)
        if governorate is not None
        else Money.zero()
    )
    surcharge = cod_fee(payment_method)

    return CheckoutTotals(
        subtotal=subtotal,
        shipping_fee=fee,
        cod_fee=surcharge,
        discount=discount,
        total=_clamped_total(subtotal, fee, surcharge, discount),
    )


def authoritative_total(totals: CheckoutTotals) -> Money:
    """Recompute the total from the four components of ``totals``.

    ``totals.total`` is never read, so a snapshot that went through UI state
    can not carry a drifted total into an order.
    """
    return _clamped_total(
        totals.subtotal, totals.shipping_fee, totals.cod_fee, totals.discount
    )


def _clamped_total(
    subtotal: Money,
    shipping: Money,
    surcharge: Money,
    discount: Money,
) -> Money:
    millimes = subtotal.millimes + shipping.millimes + surcharge.millimes - discount.millimes
    return Money.from_millimes(max(0, millimes))
