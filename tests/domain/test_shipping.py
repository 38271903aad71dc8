"""Unit tests for the shipping tariff resolver."""

from decimal import Decimal

import pytest

from ghalinino.domain.model.shipping import (
    SHIPPING_TARIFFS,
    SHIPPING_ZONES,
    WHOLESALE_FREE_SHIPPING_THRESHOLD,
    Governorate,
    ShippingZone,
    free_shipping_progress,
    quote_shipping,
    resolve_tier,
    resolve_zone,
    shipping_fee,
    zone_name,
)
from ghalinino.domain.model.value_objects import Language, Money


class TestZoneTable:

    def test_every_governorate_belongs_to_exactly_one_zone(self):
        assigned = [gov for govs in SHIPPING_ZONES.values() for gov in govs]
        assert sorted(g.value for g in assigned) == sorted(g.value for g in Governorate)
        assert len(assigned) == len(set(assigned)) == 24

    @pytest.mark.parametrize("zone", list(ShippingZone))
    def test_wholesale_fee_never_exceeds_retail_fee(self, zone):
        tariff = SHIPPING_TARIFFS[zone]
        assert tariff.wholesale_fee <= tariff.retail_fee


class TestResolveTier:

    @pytest.mark.parametrize(
        "governorate, zone",
        [
            (Governorate.TUNIS, ShippingZone.GRAND_TUNIS),
            (Governorate.BIZERTE, ShippingZone.NORTH),
            (Governorate.SFAX, ShippingZone.CENTER),
            (Governorate.GABES, ShippingZone.SOUTH),
        ],
    )
    def test_known_governorates(self, governorate, zone):
        assert resolve_tier(governorate).zone is zone

    def test_accepts_string_identifiers(self):
        assert resolve_zone("ben_arous") is ShippingZone.GRAND_TUNIS

    def test_unknown_identifier_falls_back_to_center(self):
        assert resolve_zone("atlantis") is ShippingZone.CENTER
        assert resolve_tier("atlantis").retail_fee == Money.of("8")


class TestShippingFee:

    def test_retail_fee(self):
        assert shipping_fee(Governorate.TUNIS, False, Money.of("150")) == Money.of("5")
        assert shipping_fee(Governorate.GABES, False, Money.of("150")) == Money.of("10")

    def test_retail_never_ships_free(self):
        assert shipping_fee(Governorate.SFAX, False, Money.of("10000")) == Money.of("8")

    def test_wholesale_fee_below_threshold(self):
        assert shipping_fee(Governorate.GABES, True, Money.of("300")) == Money.of("8")

    def test_wholesale_free_at_exact_threshold(self):
        fee = shipping_fee(Governorate.SFAX, True, WHOLESALE_FREE_SHIPPING_THRESHOLD)
        assert fee == Money.zero()

    def test_wholesale_one_millime_below_threshold_pays(self):
        subtotal = WHOLESALE_FREE_SHIPPING_THRESHOLD - Money.of("0.001")
        assert shipping_fee(Governorate.SFAX, True, subtotal) == Money.of("6")

    def test_pure(self):
        first = shipping_fee(Governorate.KEF, True, Money.of("42"))
        second = shipping_fee(Governorate.KEF, True, Money.of("42"))
        assert first == second == Money.of("5")


class TestShippingQuote:

    def test_retail_quote_has_no_saving(self):
        quote = quote_shipping(Governorate.TUNIS, False, Money.of("100"))
        assert quote.final_fee == Money.of("5")
        assert quote.wholesale_saving == Money.zero()
        assert not quote.is_free
        assert quote.amount_until_free is None

    def test_wholesale_quote_below_threshold(self):
        quote = quote_shipping(Governorate.GABES, True, Money.of("300"))
        assert quote.base_fee == Money.of("10")
        assert quote.final_fee == Money.of("8")
        assert quote.wholesale_saving == Money.of("2")
        assert quote.amount_until_free == Money.of("200")

    def test_wholesale_quote_free(self):
        quote = quote_shipping(Governorate.GABES, True, Money.of("600"))
        assert quote.is_free
        assert quote.wholesale_saving == Money.of("10")
        assert quote.amount_until_free is None


class TestFreeShippingProgress:

    def test_retail_has_no_progress(self):
        assert free_shipping_progress(Money.of("100"), False) is None

    def test_partial_progress(self):
        progress = free_shipping_progress(Money.of("125"), True)
        assert progress.percentage == Decimal("25.0")
        assert progress.amount_remaining == Money.of("375")
        assert not progress.qualifies

    def test_reached(self):
        progress = free_shipping_progress(Money.of("800"), True)
        assert progress.qualifies
        assert progress.amount_remaining == Money.zero()


def test_zone_names_are_bilingual():
    assert zone_name(Governorate.TUNIS, Language.FR) == "Grand Tunis"
    assert zone_name("kebili", Language.AR) == "الجنوب"
