"""Wire schema of the remote ``create_order`` procedure.

This is the single place that knows the request and response field names
of the order-creation call. Gateways serialize through
``to_create_order_params`` and read replies through
``parse_create_order_response``; nothing else builds raw dicts.

Request::

    {"p_order_data": {...header...}, "p_items": [{...line item...}, ...]}

Response::

    {"success": true, "order_id": "<uuid>", "order_number": "ORD-YYYYMMDD-NNNN"}

Money travels as a string with three decimals (TND).
"""

from __future__ import annotations

from typing import Any

from ghalinino.domain.exceptions import OrderGatewayError
from ghalinino.domain.model.order import (
    OrderHeader,
    OrderLineItem,
    OrderSubmission,
    ShippingAddress,
)
from ghalinino.domain.model.value_objects import Money
from ghalinino.domain.repository.order_gateway import CreatedOrder, FailureReason


def money_to_wire(money: Money) -> str:
    return f"{money.amount:.3f}"


def address_to_wire(address: ShippingAddress) -> dict[str, Any]:
    return {
        "full_name": address.full_name,
        "phone": address.phone,
        "address_line_1": address.address_line1,
        "address_line_2": address.address_line2,
        "city": address.city,
        "governorate": address.governorate.value,
        "postal_code": address.postal_code,
    }


def header_to_wire(header: OrderHeader) -> dict[str, Any]:
    return {
        "user_id": header.user_id,
        "guest_email": header.guest_email,
        "guest_phone": header.guest_phone,
        "customer_name": header.customer_name,
        "status": header.status.value,
        "payment_method": header.payment_method.value,
        "payment_status": header.payment_status.value,
        "subtotal": money_to_wire(header.subtotal),
        "shipping_cost": money_to_wire(header.shipping_cost),
        "discount_amount": money_to_wire(header.discount_amount),
        "tax_amount": money_to_wire(header.tax_amount),
        "total": money_to_wire(header.total),
        "shipping_address": address_to_wire(header.shipping_address),
        "billing_address": address_to_wire(header.billing_address),
        "notes": header.notes,
        "is_wholesale_order": header.is_wholesale_order,
    }


def line_item_to_wire(item: OrderLineItem) -> dict[str, Any]:
    return {
        "product_id": item.product_id,
        "quantity": item.quantity.value,
        "unit_price": money_to_wire(item.unit_price),
        "total_price": money_to_wire(item.total_price),
        "product_snapshot": {
            "id": item.snapshot.id,
            "name_ar": item.snapshot.name_ar,
            "name_fr": item.snapshot.name_fr,
            "sku": item.snapshot.sku,
            "image": item.snapshot.image,
        },
        "is_wholesale_price": item.is_wholesale_price,
    }


def to_create_order_params(submission: OrderSubmission) -> dict[str, Any]:
    return {
        "p_order_data": header_to_wire(submission.header),
        "p_items": [line_item_to_wire(item) for item in submission.items],
    }


def parse_create_order_response(raw: Any) -> CreatedOrder:
    """Validate the procedure's reply; anything unexpected is a failure."""
    if not isinstance(raw, dict):
        raise OrderGatewayError(
            f"Malformed create_order response: {raw!r}",
            FailureReason.MALFORMED_RESPONSE,
        )
    order_id = raw.get("order_id")
    order_number = raw.get("order_number")
    if not order_id or not order_number:
        raise OrderGatewayError(
            "create_order response is missing order_id or order_number",
            FailureReason.MALFORMED_RESPONSE,
        )
    return CreatedOrder(order_id=str(order_id), order_number=str(order_number))
