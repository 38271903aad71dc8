"""Shipping tariffs for deliveries inside Tunisia.

Every governorate belongs to exactly one shipping zone, and every zone
carries a retail fee and a lower wholesale fee. Wholesale orders at or
above the free-shipping threshold ship for free.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ghalinino.domain.model.value_objects import Language, Money

logger = logging.getLogger(__name__)


class Governorate(Enum):
    # Grand Tunis
    TUNIS = "tunis"
    ARIANA = "ariana"
    BEN_AROUS = "ben_arous"
    MANOUBA = "manouba"
    # North
    NABEUL = "nabeul"
    ZAGHOUAN = "zaghouan"
    BIZERTE = "bizerte"
    BEJA = "beja"
    JENDOUBA = "jendouba"
    KEF = "kef"
    SILIANA = "siliana"
    # Center
    SOUSSE = "sousse"
    MONASTIR = "monastir"
    MAHDIA = "mahdia"
    SFAX = "sfax"
    KAIROUAN = "kairouan"
    KASSERINE = "kasserine"
    SIDI_BOUZID = "sidi_bouzid"
    # South
    GABES = "gabes"
    MEDENINE = "medenine"
    TATAOUINE = "tataouine"
    GAFSA = "gafsa"
    TOZEUR = "tozeur"
    KEBILI = "kebili"


class ShippingZone(Enum):
    GRAND_TUNIS = "grand_tunis"
    NORTH = "north"
    CENTER = "center"
    SOUTH = "south"


@dataclass(frozen=True)
class ShippingTariff:
    """Fee schedule of one shipping zone.

    The free-shipping threshold only applies to wholesale orders.
    """

    zone: ShippingZone
    retail_fee: Money
    wholesale_fee: Money
    free_shipping_threshold: Money


# ---------------------------------------------------------------------------
# Static configuration
# ---------------------------------------------------------------------------
WHOLESALE_FREE_SHIPPING_THRESHOLD = Money(Decimal("500.000"))
FALLBACK_ZONE = ShippingZone.CENTER

SHIPPING_ZONES: dict[ShippingZone, tuple[Governorate, ...]] = {
    ShippingZone.GRAND_TUNIS: (
        Governorate.TUNIS,
        Governorate.ARIANA,
        Governorate.BEN_AROUS,
        Governorate.MANOUBA,
    ),
    ShippingZone.NORTH: (
        Governorate.NABEUL,
        Governorate.ZAGHOUAN,
        Governorate.BIZERTE,
        Governorate.BEJA,
        Governorate.JENDOUBA,
        Governorate.KEF,
        Governorate.SILIANA,
    ),
    ShippingZone.CENTER: (
        Governorate.SOUSSE,
        Governorate.MONASTIR,
        Governorate.MAHDIA,
        Governorate.SFAX,
        Governorate.KAIROUAN,
        Governorate.KASSERINE,
        Governorate.SIDI_BOUZID,
    ),
    ShippingZone.SOUTH: (
        Governorate.GABES,
        Governorate.MEDENINE,
        Governorate.TATAOUINE,
        Governorate.GAFSA,
        Governorate.TOZEUR,
        Governorate.KEBILI,
    ),
}


def _tariff(zone: ShippingZone, retail: str, wholesale: str) -> ShippingTariff:
    return ShippingTariff(
        zone=zone,
        retail_fee=Money.of(retail),
        wholesale_fee=Money.of(wholesale),
        free_shipping_threshold=WHOLESALE_FREE_SHIPPING_THRESHOLD,
    )


SHIPPING_TARIFFS: dict[ShippingZone, ShippingTariff] = {
    ShippingZone.GRAND_TUNIS: _tariff(ShippingZone.GRAND_TUNIS, "5.000", "4.000"),
    ShippingZone.NORTH: _tariff(ShippingZone.NORTH, "7.000", "5.000"),
    ShippingZone.CENTER: _tariff(ShippingZone.CENTER, "8.000", "6.000"),
    ShippingZone.SOUTH: _tariff(ShippingZone.SOUTH, "10.000", "8.000"),
}

ZONE_NAMES: dict[ShippingZone, dict[Language, str]] = {
    ShippingZone.GRAND_TUNIS: {Language.AR: "تونس الكبرى", Language.FR: "Grand Tunis"},
    ShippingZone.NORTH: {Language.AR: "الشمال", Language.FR: "Nord"},
    ShippingZone.CENTER: {Language.AR: "الوسط", Language.FR: "Centre"},
    ShippingZone.SOUTH: {Language.AR: "الجنوب", Language.FR: "Sud"},
}


# ---------------------------------------------------------------------------
# Tariff resolution
# ---------------------------------------------------------------------------


def resolve_zone(governorate: Governorate | str) -> ShippingZone:
    """Return the shipping zone of a governorate.

    Unknown identifiers fall back to the center zone so checkout can
    always complete with a defined fee.
    """
    for zone, governorates in SHIPPING_ZONES.items():
        for gov in governorates:
            if gov is governorate or gov.value == governorate:
                return zone
    logger.warning(
        "Unknown governorate %r, using %s shipping zone",
        governorate,
        FALLBACK_ZONE.value,
    )
    return FALLBACK_ZONE


def resolve_tier(governorate: Governorate | str) -> ShippingTariff:
    return SHIPPING_TARIFFS[resolve_zone(governorate)]


def shipping_fee(
    governorate: Governorate | str,
    is_wholesale: bool,
    subtotal: Money,
) -> Money:
    """Shipping fee for a destination, account type and cart subtotal."""
    tariff = resolve_tier(governorate)
    if is_wholesale:
        if subtotal >= tariff.free_shipping_threshold:
            return Money.zero()
        return tariff.wholesale_fee
    return tariff.retail_fee


def zone_name(governorate: Governorate | str, language: Language) -> str:
    return ZONE_NAMES[resolve_zone(governorate)][language]


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShippingQuote:
    """Breakdown of a shipping fee as shown on the checkout page."""

    base_fee: Money
    wholesale_saving: Money
    final_fee: Money
    is_free: bool
    amount_until_free: Money | None = None


def quote_shipping(
    governorate: Governorate | str,
    is_wholesale: bool,
    subtotal: Money,
) -> ShippingQuote:
    """Explain the shipping fee against the retail base fee.

    ``amount_until_free`` is only set for wholesale orders that have not
    reached the free-shipping threshold yet.
    """
    tariff = resolve_tier(governorate)
    final_fee = shipping_fee(governorate, is_wholesale, subtotal)
    is_free = is_wholesale and final_fee.is_zero

    amount_until_free = None
    if is_wholesale and not is_free:
        amount_until_free = tariff.free_shipping_threshold - subtotal

    return ShippingQuote(
        base_fee=tariff.retail_fee,
        wholesale_saving=tariff.retail_fee - final_fee,
        final_fee=final_fee,
        is_free=is_free,
        amount_until_free=amount_until_free,
    )


@dataclass(frozen=True)
class FreeShippingProgress:
    percentage: Decimal
    amount_remaining: Money
    qualifies: bool


def free_shipping_progress(
    subtotal: Money,
    is_wholesale: bool,
) -> FreeShippingProgress | None:
    """Progress toward free shipping; retail accounts never qualify."""
    if not is_wholesale:
        return None

    threshold = WHOLESALE_FREE_SHIPPING_THRESHOLD
    if subtotal >= threshold:
        return FreeShippingProgress(Decimal("100"), Money.zero(), True)

    percentage = (Decimal(subtotal.millimes * 100) / threshold.millimes).quantize(
        Decimal("0.1")
    )
    return FreeShippingProgress(percentage, threshold - subtotal, False)
