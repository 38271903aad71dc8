"""Integration tests for the SubmitOrder use case.

Uses an in-memory fake gateway — no file I/O.
"""

import pytest

from ghalinino.application.dto import OrderErrorKind
from ghalinino.application.submit_order import (
    STOCK_CONFLICT_MESSAGE,
    SubmitOrderHandler,
    classify_gateway_error,
)
from ghalinino.domain.exceptions import OrderGatewayError
from ghalinino.domain.model.cart import CartItem, cart_subtotal
from ghalinino.domain.model.checkout import calculate_totals
from ghalinino.domain.model.order import AccountContext, ShippingAddress
from ghalinino.domain.model.payment import PaymentMethod, PaymentStatus
from ghalinino.domain.model.value_objects import Money, Quantity
from ghalinino.domain.repository.order_gateway import FailureReason
from tests.fakes import FailingGateway, FakeOrderGateway, make_product


def _cart() -> list[CartItem]:
    return [
        CartItem(make_product("a", price="50.000", wholesale_price="42.000"), Quantity(2)),
        CartItem(make_product("b", price="12.500"), Quantity(4)),
    ]


def _address() -> ShippingAddress:
    return ShippingAddress.create(
        full_name="Youssef Trabelsi",
        phone="98765432",
        address_line1="Avenue Habib Bourguiba",
        city="Gabès",
        governorate="gabes",
    )


def _submit(gateway, is_wholesale=False, method=PaymentMethod.COD, cart=None, account=None):
    cart = _cart() if cart is None else cart
    totals = calculate_totals(
        cart_subtotal(cart, is_wholesale), "gabes", method, is_wholesale
    )
    handler = SubmitOrderHandler(gateway)
    return handler.handle(
        cart=cart,
        shipping_address=_address(),
        payment_method=method,
        totals=totals,
        is_wholesale=is_wholesale,
        account=account or AccountContext(user_id="user-42", is_wholesale=is_wholesale),
    )


class TestSubmitOrderHappyPath:

    def test_returns_order_identifiers(self):
        result = _submit(FakeOrderGateway())
        assert result.success
        assert result.order_id == "order-1"
        assert result.order_number == "ORD-20260101-0001"
        assert result.error is None

    def test_single_gateway_call_with_all_lines(self):
        gateway = FakeOrderGateway()
        _submit(gateway)
        assert len(gateway.submissions) == 1
        assert [i.product_id for i in gateway.submissions[0].items] == ["a", "b"]

    def test_retail_payload(self):
        gateway = FakeOrderGateway()
        _submit(gateway, is_wholesale=False)
        header = gateway.submissions[0].header
        assert header.subtotal == Money.of("150")
        assert header.shipping_cost == Money.of("10")
        assert header.cod_fee == Money.of("2")
        assert header.total == Money.of("162")
        assert header.payment_status is PaymentStatus.PENDING

    def test_wholesale_payload(self):
        gateway = FakeOrderGateway()
        _submit(gateway, is_wholesale=True, method=PaymentMethod.BANK_TRANSFER)
        submission = gateway.submissions[0]
        first, second = submission.items
        assert first.unit_price == Money.of("42")
        assert first.is_wholesale_price
        assert second.unit_price == Money.of("12.5")
        assert not second.is_wholesale_price
        assert submission.header.subtotal == Money.of("134")
        assert submission.header.shipping_cost == Money.of("8")
        assert submission.header.total == Money.of("142")

    @pytest.mark.parametrize(
        "entry_point, method",
        [
            ("submit_cod", PaymentMethod.COD),
            ("submit_bank_transfer", PaymentMethod.BANK_TRANSFER),
            ("submit_flouci", PaymentMethod.FLOUCI),
        ],
    )
    def test_per_method_entry_points(self, entry_point, method):
        gateway = FakeOrderGateway()
        handler = SubmitOrderHandler(gateway)
        cart = _cart()
        totals = calculate_totals(cart_subtotal(cart, False), "gabes", method, False)
        result = getattr(handler, entry_point)(cart, _address(), totals, False, AccountContext())
        assert result.success
        assert gateway.submissions[0].header.payment_method is method
        assert gateway.submissions[0].header.payment_status is PaymentStatus.PENDING

    def test_long_cart_is_submitted(self):
        gateway = FakeOrderGateway()
        cart = [CartItem(make_product(f"p{i}"), Quantity(1)) for i in range(51)]
        result = _submit(gateway, cart=cart)
        assert result.success
        assert len(gateway.submissions[0].items) == 51


class TestSubmitOrderFailures:

    def test_structured_stock_failure(self):
        gateway = FailingGateway("out of stock", FailureReason.INSUFFICIENT_STOCK)
        result = _submit(gateway)
        assert not result.success
        assert result.error_kind is OrderErrorKind.INSUFFICIENT_STOCK
        assert result.error == STOCK_CONFLICT_MESSAGE

    def test_legacy_stock_message(self):
        gateway = FailingGateway(
            "Insufficient stock for product a. Requested: 2, Available: 1"
        )
        result = _submit(gateway)
        assert result.error_kind is OrderErrorKind.INSUFFICIENT_STOCK

    def test_network_failure_is_generic(self):
        gateway = FailingGateway("Failed to fetch", FailureReason.UNAVAILABLE)
        result = _submit(gateway)
        assert not result.success
        assert result.error_kind is OrderErrorKind.ORDER_FAILED
        assert result.error == "Failed to fetch"

    def test_unexpected_gateway_exception_is_returned(self):
        result = _submit(FakeOrderGateway(error=ConnectionError("Failed to fetch")))
        assert not result.success
        assert result.error_kind is OrderErrorKind.ORDER_FAILED
        assert result.error == "Failed to fetch"

    def test_unexpected_exception_without_message(self):
        result = _submit(FakeOrderGateway(error=RuntimeError()))
        assert result.error_kind is OrderErrorKind.ORDER_FAILED
        assert result.error == "Order creation failed"

    def test_wholesale_below_minimum_is_rejected(self):
        gateway = FakeOrderGateway()
        cart = [CartItem(make_product("c", price="8.000"), Quantity(1))]
        result = _submit(gateway, is_wholesale=True, cart=cart)
        assert not result.success
        assert result.error_kind is OrderErrorKind.VALIDATION
        assert "92.000 TND" in result.error
        assert gateway.submissions == []

    def test_retail_has_no_minimum(self):
        cart = [CartItem(make_product("c", price="8.000"), Quantity(1))]
        assert _submit(FakeOrderGateway(), cart=cart).success

    def test_empty_cart_is_a_validation_failure(self):
        gateway = FakeOrderGateway()
        result = _submit(gateway, cart=[])
        assert result.error_kind is OrderErrorKind.VALIDATION
        assert gateway.submissions == []

    def test_failure_is_not_retried(self):
        gateway = FailingGateway("boom")
        _submit(gateway)
        assert len(gateway.submissions) == 1


class TestClassifyGatewayError:

    def test_structured_reason_wins_over_message(self):
        exc = OrderGatewayError("Insufficient stock?", FailureReason.PRODUCT_NOT_FOUND)
        assert classify_gateway_error(exc) is OrderErrorKind.ORDER_FAILED

    def test_message_shim_only_without_reason(self):
        assert (
            classify_gateway_error(OrderGatewayError("Insufficient stock for product x"))
            is OrderErrorKind.INSUFFICIENT_STOCK
        )
        assert (
            classify_gateway_error(OrderGatewayError("connection reset"))
            is OrderErrorKind.ORDER_FAILED
        )
