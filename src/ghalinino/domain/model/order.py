"""Order submission payload — what the storefront sends to create an order.

The order itself lives in the external platform. This module models the
header and line items as they are frozen at checkout time, and the status
lifecycle the platform enforces afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ghalinino.domain.exceptions import ValidationError
from ghalinino.domain.model.cart import CartItem
from ghalinino.domain.model.checkout import CheckoutTotals, authoritative_total
from ghalinino.domain.model.payment import (
    PaymentMethod,
    PaymentStatus,
    initial_payment_status,
)
from ghalinino.domain.model.shipping import Governorate
from ghalinino.domain.model.value_objects import Language, Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self]


# Cash-on-delivery orders skip PAID: they go straight to PROCESSING.
_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PAID, OrderStatus.PROCESSING, OrderStatus.CANCELLED}
    ),
    OrderStatus.PAID: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
    ),
    OrderStatus.PROCESSING: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.REFUNDED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

ORDER_STATUS_LABELS: dict[OrderStatus, dict[Language, str]] = {
    OrderStatus.PENDING: {Language.AR: "قيد الانتظار", Language.FR: "En attente"},
    OrderStatus.PAID: {Language.AR: "تم الدفع", Language.FR: "Payé"},
    OrderStatus.PROCESSING: {Language.AR: "قيد التجهيز", Language.FR: "En préparation"},
    OrderStatus.SHIPPED: {Language.AR: "تم الشحن", Language.FR: "Expédié"},
    OrderStatus.DELIVERED: {Language.AR: "تم التوصيل", Language.FR: "Livré"},
    OrderStatus.CANCELLED: {Language.AR: "ملغي", Language.FR: "Annulé"},
    OrderStatus.REFUNDED: {Language.AR: "تم الاسترجاع", Language.FR: "Remboursé"},
}


# ---------------------------------------------------------------------------
# Phone numbers
# ---------------------------------------------------------------------------
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")
_PHONE_PATTERNS = (
    re.compile(r"^\+216[2-9]\d{7}$"),
    re.compile(r"^216[2-9]\d{7}$"),
    re.compile(r"^0[2-9]\d{7}$"),
    re.compile(r"^[2-9]\d{7}$"),
)


def is_valid_tunisian_phone(phone: str) -> bool:
    cleaned = _PHONE_SEPARATORS.sub("", phone)
    return any(p.match(cleaned) for p in _PHONE_PATTERNS)


def format_phone(phone: str) -> str:
    """Format as ``+216 XX XXX XXX``; unrecognised input is returned as is."""
    cleaned = _PHONE_SEPARATORS.sub("", phone)
    for prefix in ("+216", "216", "0"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
            break
    if len(cleaned) != 8:
        return phone
    return f"+216 {cleaned[:2]} {cleaned[2:5]} {cleaned[5:]}"


# ---------------------------------------------------------------------------
# Value objects of the payload
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShippingAddress:
    """Delivery address; also used as the billing address."""

    full_name: str
    phone: str
    address_line1: str
    city: str
    governorate: Governorate
    address_line2: str | None = None
    postal_code: str | None = None

    @staticmethod
    def create(
        full_name: str,
        phone: str,
        address_line1: str,
        city: str,
        governorate: Governorate | str,
        address_line2: str | None = None,
        postal_code: str | None = None,
    ) -> ShippingAddress:
        """Build an address from form input, enforcing all field rules."""
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required")
        if not phone or not is_valid_tunisian_phone(phone):
            raise ValidationError(f"Invalid Tunisian phone number: {phone!r}")
        if not address_line1 or not address_line1.strip():
            raise ValidationError("Address is required")
        if not city or not city.strip():
            raise ValidationError("City is required")
        try:
            gov = Governorate(governorate) if isinstance(governorate, str) else governorate
        except ValueError as exc:
            raise ValidationError(f"Unknown governorate: {governorate!r}") from exc

        return ShippingAddress(
            full_name=full_name.strip(),
            phone=phone.strip(),
            address_line1=address_line1.strip(),
            city=city.strip(),
            governorate=gov,
            address_line2=address_line2.strip() if address_line2 else None,
            postal_code=postal_code.strip() if postal_code else None,
        )


@dataclass(frozen=True)
class AccountContext:
    """Who is ordering: a registered user, or a guest identified by contact."""

    user_id: str | None = None
    is_wholesale: bool = False
    guest_email: str | None = None
    guest_phone: str | None = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None


@dataclass(frozen=True)
class ProductSnapshot:
    """Product identity as displayed on the order forever after."""

    id: str
    name_ar: str
    name_fr: str
    image: str | None = None
    sku: str | None = None


@dataclass(frozen=True)
class OrderLineItem:
    """A cart line frozen at order-creation time (price lock)."""

    product_id: str
    quantity: Quantity
    unit_price: Money
    total_price: Money
    snapshot: ProductSnapshot
    is_wholesale_price: bool

    @staticmethod
    def from_cart_item(item: CartItem, is_wholesale: bool) -> OrderLineItem:
        product = item.product
        return OrderLineItem(
            product_id=product.id,
            quantity=item.quantity,
            unit_price=item.unit_price(is_wholesale),
            total_price=item.line_total(is_wholesale),
            snapshot=ProductSnapshot(
                id=product.id,
                name_ar=product.name_ar,
                name_fr=product.name_fr,
                image=product.primary_image,
            ),
            is_wholesale_price=product.uses_wholesale_price(is_wholesale),
        )


TAX_AMOUNT = Money(Decimal("0"))


@dataclass(frozen=True)
class OrderHeader:
    user_id: str | None
    guest_email: str | None
    guest_phone: str | None
    customer_name: str
    status: OrderStatus
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    subtotal: Money
    shipping_cost: Money
    cod_fee: Money
    discount_amount: Money
    tax_amount: Money
    total: Money
    shipping_address: ShippingAddress
    billing_address: ShippingAddress
    is_wholesale_order: bool
    notes: str | None = None


@dataclass(frozen=True)
class OrderSubmission:
    """Header plus line items, handed to the atomic order-creation call.

    Use ``OrderSubmission.create()`` — it snapshots the cart and
    recomputes the total from the totals' components.
    """

    header: OrderHeader
    items: tuple[OrderLineItem, ...]

    @staticmethod
    def create(
        cart: list[CartItem],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        totals: CheckoutTotals,
        is_wholesale: bool,
        account: AccountContext,
        notes: str | None = None,
    ) -> OrderSubmission:
        if not cart:
            raise ValidationError("Order must contain at least one item")

        items = tuple(OrderLineItem.from_cart_item(i, is_wholesale) for i in cart)

        header = OrderHeader(
            user_id=account.user_id,
            guest_email=account.guest_email if account.is_guest else None,
            guest_phone=account.guest_phone if account.is_guest else None,
            customer_name=shipping_address.full_name,
            status=OrderStatus.PENDING,
            payment_method=payment_method,
            payment_status=initial_payment_status(payment_method),
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping_fee,
            cod_fee=totals.cod_fee,
            discount_amount=totals.discount,
            tax_amount=TAX_AMOUNT,
            total=authoritative_total(totals),
            shipping_address=shipping_address,
            billing_address=shipping_address,
            is_wholesale_order=is_wholesale,
            notes=notes.strip() if notes and notes.strip() else None,
        )
        return OrderSubmission(header=header, items=items)
