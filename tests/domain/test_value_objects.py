"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from ghalinino.domain.exceptions import ValidationError
from ghalinino.domain.model.value_objects import Language, Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.5"))
        assert m.amount == Decimal("10.500")
        assert m.currency == "TND"

    def test_of_factory_from_string(self):
        m = Money.of("25.990")
        assert m.amount == Decimal("25.990")

    def test_of_factory_from_int(self):
        assert Money.of(10).millimes == 10_000

    def test_of_factory_from_float_does_not_drift(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")

    def test_invalid_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_rounds_to_the_millime(self):
        assert Money.of("1.0005").amount == Decimal("1.001")
        assert Money.of("1.0004").amount == Decimal("1.000")

    def test_millimes_round_trip(self):
        assert Money.from_millimes(157_000) == Money.of("157")
        assert Money.of("12.345").millimes == 12_345

    def test_addition(self):
        assert Money.of("10") + Money.of("5.500") == Money.of("15.5")

    def test_subtraction(self):
        assert Money.of("10") - Money.of("3") == Money.of("7")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.125") * 3 == Money.of("21.375")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "TND") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("157")) == "157.000 TND"
        assert str(Money.of("9.5")) == "9.500 TND"

    def test_localized_formatting(self):
        assert Money.of("5").format(Language.FR) == "5.000 TND"
        assert Money.of("5").format(Language.AR) == "5.000 د.ت"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10.000")
        assert Money.of("10") <= Money.of("10")

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.001").is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_str(self):
        assert str(Quantity(7)) == "7"
