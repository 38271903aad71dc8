"""Integration tests for the QuoteCheckout use case."""

import pytest

from ghalinino.application.dto import CartItemSpec
from ghalinino.application.quote_checkout import QuoteCheckoutHandler
from ghalinino.domain.exceptions import EntityNotFoundError, ValidationError
from ghalinino.domain.model.payment import PaymentMethod
from ghalinino.domain.model.value_objects import Language
from tests.fakes import FakeProductRepository, make_product


@pytest.fixture
def handler():
    repo = FakeProductRepository(
        [
            make_product("oil", price="45.000", wholesale_price="38.500"),
            make_product("dates", price="12.250"),
            make_product("old", is_active=False),
        ]
    )
    return QuoteCheckoutHandler(repo)


class TestRetailQuote:

    def test_totals_are_formatted(self, handler):
        quote = handler.handle(
            [CartItemSpec("oil", 2), CartItemSpec("dates", 4)],
            "tunis",
            PaymentMethod.COD,
            is_wholesale=False,
        )
        assert quote.subtotal == "139.000 TND"
        assert quote.shipping_fee == "5.000 TND"
        assert quote.cod_fee == "2.000 TND"
        assert quote.discount == "0.000 TND"
        assert quote.total == "146.000 TND"
        assert quote.shipping_zone == "Grand Tunis"
        assert quote.free_shipping_remaining is None
        assert quote.free_shipping_percentage is None
        assert quote.wholesale_minimum_met

    def test_lines_use_retail_prices(self, handler):
        quote = handler.handle([CartItemSpec("oil", 2)], "sfax", PaymentMethod.FLOUCI, False)
        (line,) = quote.lines
        assert line.product_name == "Produit oil"
        assert line.unit_price == "45.000 TND"
        assert line.line_total == "90.000 TND"
        assert not line.is_wholesale_price

    def test_arabic_display(self, handler):
        quote = handler.handle(
            [CartItemSpec("dates", 1)],
            "gabes",
            PaymentMethod.BANK_TRANSFER,
            False,
            language=Language.AR,
        )
        assert quote.lines[0].product_name == "منتج dates"
        assert quote.total == "22.250 د.ت"
        assert quote.shipping_zone == "الجنوب"

    def test_discount_is_subtracted(self, handler):
        quote = handler.handle(
            [CartItemSpec("dates", 4)], "tunis", PaymentMethod.FLOUCI, False, discount="10"
        )
        assert quote.discount == "10.000 TND"
        assert quote.total == "44.000 TND"

    def test_without_governorate_shipping_is_zero(self, handler):
        quote = handler.handle([CartItemSpec("dates", 1)], None, PaymentMethod.COD, False)
        assert quote.shipping_fee == "0.000 TND"
        assert quote.shipping_zone is None
        assert quote.total == "14.250 TND"


class TestWholesaleQuote:

    def test_wholesale_prices_and_fee(self, handler):
        quote = handler.handle(
            [CartItemSpec("oil", 4), CartItemSpec("dates", 2)],
            "sfax",
            PaymentMethod.BANK_TRANSFER,
            is_wholesale=True,
        )
        oil, dates = quote.lines
        assert oil.unit_price == "38.500 TND"
        assert oil.is_wholesale_price
        assert not dates.is_wholesale_price
        assert quote.subtotal == "178.500 TND"
        assert quote.shipping_fee == "6.000 TND"
        assert quote.free_shipping_remaining == "321.500 TND"
        assert quote.free_shipping_percentage == "35.7%"
        assert quote.wholesale_minimum_met

    def test_free_shipping_reached(self, handler):
        quote = handler.handle([CartItemSpec("oil", 13)], "kebili", PaymentMethod.COD, True)
        assert quote.subtotal == "500.500 TND"
        assert quote.shipping_fee == "0.000 TND"
        assert quote.free_shipping_remaining is None
        assert quote.total == "502.500 TND"
        assert quote.free_shipping_percentage == "100%"

    def test_below_wholesale_minimum(self, handler):
        quote = handler.handle([CartItemSpec("dates", 2)], "tunis", PaymentMethod.COD, True)
        assert not quote.wholesale_minimum_met
        assert quote.wholesale_amount_short == "75.500 TND"


class TestQuoteValidation:

    def test_empty_cart(self, handler):
        with pytest.raises(ValidationError, match="Cart is empty"):
            handler.handle([], "tunis", PaymentMethod.COD, False)

    def test_unknown_product(self, handler):
        with pytest.raises(EntityNotFoundError, match="ghost"):
            handler.handle([CartItemSpec("ghost", 1)], "tunis", PaymentMethod.COD, False)

    def test_inactive_product(self, handler):
        with pytest.raises(ValidationError, match="no longer available"):
            handler.handle([CartItemSpec("old", 1)], "tunis", PaymentMethod.COD, False)

    def test_non_positive_quantity(self, handler):
        with pytest.raises(ValidationError):
            handler.handle([CartItemSpec("oil", 0)], "tunis", PaymentMethod.COD, False)
