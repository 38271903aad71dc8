"""CLI commands for shipping tariffs."""

from __future__ import annotations

import click

from ghalinino.domain.exceptions import DomainException
from ghalinino.domain.model.shipping import (
    SHIPPING_TARIFFS,
    SHIPPING_ZONES,
    Governorate,
    quote_shipping,
    zone_name,
)
from ghalinino.domain.model.value_objects import Language, Money
from ghalinino.domain.model.wholesale import WholesaleStatus, can_see_wholesale_prices

GOVERNORATE_CHOICE = click.Choice([g.value for g in Governorate])
LANGUAGE_CHOICE = click.Choice([lang.value for lang in Language])
WHOLESALE_STATUS_CHOICE = click.Choice([s.value for s in WholesaleStatus])


@click.command("zones")
@click.option("--lang", default="fr", type=LANGUAGE_CHOICE, help="Display language.")
def shipping_zones(lang: str) -> None:
    """List governorates with their zone and fees."""
    language = Language(lang)
    click.echo(f"{'Governorate':<14} {'Zone':<14} {'Retail':>12} {'Wholesale':>12}")
    click.echo("-" * 55)
    for zone, governorates in SHIPPING_ZONES.items():
        tariff = SHIPPING_TARIFFS[zone]
        for gov in governorates:
            click.echo(
                f"{gov.value:<14} {zone_name(gov, language):<14} "
                f"{tariff.retail_fee.format(language):>12} "
                f"{tariff.wholesale_fee.format(language):>12}"
            )


@click.command("fee")
@click.option("--governorate", required=True, type=GOVERNORATE_CHOICE, help="Destination.")
@click.option("--subtotal", required=True, help="Cart subtotal in TND (e.g. 150.000).")
@click.option(
    "--wholesale-status",
    default="none",
    type=WHOLESALE_STATUS_CHOICE,
    help="Account wholesale status; only approved accounts get wholesale prices.",
)
@click.option("--lang", default="fr", type=LANGUAGE_CHOICE, help="Display language.")
def shipping_fee_cmd(governorate: str, subtotal: str, wholesale_status: str, lang: str) -> None:
    """Show the shipping fee for a destination and subtotal."""
    wholesale = can_see_wholesale_prices(wholesale_status)
    language = Language(lang)
    try:
        quote = quote_shipping(governorate, wholesale, Money.of(subtotal))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Zone:      {zone_name(governorate, language)}")
    click.echo(f"Base fee:  {quote.base_fee.format(language)}")
    click.echo(f"Fee:       {quote.final_fee.format(language)}")
    if quote.is_free:
        click.echo("Free shipping (wholesale threshold reached)")
    elif quote.amount_until_free is not None:
        click.echo(f"Spend {quote.amount_until_free.format(language)} more for free shipping")
