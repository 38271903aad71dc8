"""Application service: Submit Order use case.

Turns a cart plus the checkout totals into an order submission and hands
it to the atomic order-creation gateway in a single call. Failures are
returned as an ``OrderResult``, never raised, so the checkout page can stay
on the review step with the customer's input intact.

No retries happen here: a failed submission is re-triggered by the
customer.
"""

from __future__ import annotations

import logging

from ghalinino.application.dto import OrderErrorKind, OrderResult
from ghalinino.domain.exceptions import OrderGatewayError, ValidationError
from ghalinino.domain.model.cart import CartItem
from ghalinino.domain.model.checkout import CheckoutTotals
from ghalinino.domain.model.order import AccountContext, OrderSubmission, ShippingAddress
from ghalinino.domain.model.payment import PaymentMethod
from ghalinino.domain.model.wholesale import check_wholesale_minimum
from ghalinino.domain.repository.order_gateway import FailureReason, OrderGateway

logger = logging.getLogger(__name__)

STOCK_CONFLICT_MESSAGE = (
    "Some items in your cart are no longer available in the requested quantity."
)

# Marker the remote procedure puts in its exception text when stock runs out.
LEGACY_STOCK_MARKER = "Insufficient stock"


def classify_gateway_error(exc: OrderGatewayError) -> OrderErrorKind:
    """Map a gateway failure to the error category shown to the customer."""
    if exc.reason is FailureReason.INSUFFICIENT_STOCK:
        return OrderErrorKind.INSUFFICIENT_STOCK
    if exc.reason is None and _legacy_message_is_stock_conflict(str(exc)):
        return OrderErrorKind.INSUFFICIENT_STOCK
    return OrderErrorKind.ORDER_FAILED


def _legacy_message_is_stock_conflict(message: str) -> bool:
    """Compatibility shim for gateways that only return free text.

    Only consulted when no structured reason is available.
    """
    return LEGACY_STOCK_MARKER in message


class SubmitOrderHandler:

    def __init__(self, gateway: OrderGateway) -> None:
        self._gateway = gateway

    def handle(
        self,
        cart: list[CartItem],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        totals: CheckoutTotals,
        is_wholesale: bool,
        account: AccountContext,
        notes: str | None = None,
    ) -> OrderResult:
        """Submit an order.

        Steps:
        1. Snapshot every cart line with its applicable unit price.
        2. Recompute the total from the totals' components.
        3. Build the pending order header.
        4. Refuse wholesale carts below the wholesale minimum.
        5. Call the gateway once with header and line items.
        6. Classify any failure; nothing the gateway raises escapes.
        """
        try:
            submission = OrderSubmission.create(
                cart=cart,
                shipping_address=shipping_address,
                payment_method=payment_method,
                totals=totals,
                is_wholesale=is_wholesale,
                account=account,
                notes=notes,
            )
        except ValidationError as exc:
            logger.info("Order rejected before submission: %s", exc)
            return OrderResult.failed(OrderErrorKind.VALIDATION, str(exc))

        minimum = check_wholesale_minimum(totals.subtotal, is_wholesale)
        if not minimum.minimum_met:
            logger.info("Wholesale order below minimum by %s", minimum.amount_short)
            return OrderResult.failed(
                OrderErrorKind.VALIDATION,
                f"Wholesale orders require a minimum of {minimum.minimum_required}: "
                f"add {minimum.amount_short} to your cart",
            )

        logger.info(
            "Submitting %s order: %d line(s), total %s",
            payment_method.value,
            len(submission.items),
            submission.header.total,
        )

        try:
            created = self._gateway.create_order(submission)
        except OrderGatewayError as exc:
            kind = classify_gateway_error(exc)
            logger.error("Order creation failed (%s): %s", kind.value, exc)
            if kind is OrderErrorKind.INSUFFICIENT_STOCK:
                return OrderResult.failed(kind, STOCK_CONFLICT_MESSAGE)
            return OrderResult.failed(kind, str(exc) or "Order creation failed")
        except Exception as exc:
            logger.exception("Order creation failed unexpectedly")
            return OrderResult.failed(
                OrderErrorKind.ORDER_FAILED, str(exc) or "Order creation failed"
            )

        logger.info("Order %s created (id=%s)", created.order_number, created.order_id)
        return OrderResult.ok(created.order_id, created.order_number)

    # --- Per payment method ---------------------------------------------------

    def submit_cod(
        self,
        cart: list[CartItem],
        shipping_address: ShippingAddress,
        totals: CheckoutTotals,
        is_wholesale: bool,
        account: AccountContext,
        notes: str | None = None,
    ) -> OrderResult:
        """Cash on delivery: collected by the courier."""
        return self.handle(
            cart, shipping_address, PaymentMethod.COD, totals, is_wholesale, account, notes
        )

    def submit_bank_transfer(
        self,
        cart: list[CartItem],
        shipping_address: ShippingAddress,
        totals: CheckoutTotals,
        is_wholesale: bool,
        account: AccountContext,
        notes: str | None = None,
    ) -> OrderResult:
        """Bank transfer: stays pending until an admin confirms the transfer."""
        return self.handle(
            cart, shipping_address, PaymentMethod.BANK_TRANSFER, totals, is_wholesale, account, notes
        )

    def submit_flouci(
        self,
        cart: list[CartItem],
        shipping_address: ShippingAddress,
        totals: CheckoutTotals,
        is_wholesale: bool,
        account: AccountContext,
        notes: str | None = None,
    ) -> OrderResult:
        """Flouci: stays pending until the payment webhook confirms it."""
        return self.handle(
            cart, shipping_address, PaymentMethod.FLOUCI, totals, is_wholesale, account, notes
        )
