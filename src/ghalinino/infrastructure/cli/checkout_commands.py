"""CLI commands for checkout: quote the totals, then place the order."""

from __future__ import annotations

import click

from ghalinino.application.dto import CartItemSpec, CheckoutQuoteDTO
from ghalinino.application.quote_checkout import QuoteCheckoutHandler
from ghalinino.application.submit_order import SubmitOrderHandler
from ghalinino.domain.exceptions import DomainException
from ghalinino.domain.model.order import (
    ORDER_STATUS_LABELS,
    AccountContext,
    OrderStatus,
    ShippingAddress,
    format_phone,
)
from ghalinino.domain.model.payment import PAYMENT_METHODS, PaymentMethod
from ghalinino.domain.model.value_objects import Language, Money
from ghalinino.domain.model.wholesale import can_see_wholesale_prices
from ghalinino.infrastructure.bootstrap import order_gateway, product_repository
from ghalinino.infrastructure.cli.shipping_commands import (
    GOVERNORATE_CHOICE,
    LANGUAGE_CHOICE,
    WHOLESALE_STATUS_CHOICE,
)

PAYMENT_CHOICE = click.Choice([m.value for m in PaymentMethod])


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'p1:3,p2:5' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_quote(dto: CheckoutQuoteDTO) -> None:
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for line in dto.lines:
        marker = " *" if line.is_wholesale_price else ""
        click.echo(
            f"  {line.product_name + marker:<24} {line.quantity:>5} "
            f"{line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>30}")
    click.echo(f"  {'Shipping':<30} {dto.shipping_fee:>30}")
    click.echo(f"  {'COD fee':<30} {dto.cod_fee:>30}")
    click.echo(f"  {'Discount':<30} {'-' + dto.discount:>30}")
    click.echo(f"  {'Total':<30} {dto.total:>30}")

    if dto.shipping_zone is None:
        click.echo("  (shipping not included: no governorate selected)")
    else:
        click.echo(f"  Shipping zone: {dto.shipping_zone}")
    if dto.free_shipping_remaining is not None:
        click.echo(f"  Spend {dto.free_shipping_remaining} more for free shipping")
    if dto.free_shipping_percentage is not None:
        click.echo(f"  Free shipping progress: {dto.free_shipping_percentage}")
    if not dto.wholesale_minimum_met:
        click.echo(f"  Wholesale minimum not met: {dto.wholesale_amount_short} short")


@click.command("quote")
@click.option("--items", required=True, help="Cart as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--governorate", default=None, type=GOVERNORATE_CHOICE, help="Destination.")
@click.option("--payment", default="cod", type=PAYMENT_CHOICE, help="Payment method.")
@click.option(
    "--wholesale-status",
    default="none",
    type=WHOLESALE_STATUS_CHOICE,
    help="Account wholesale status; only approved accounts get wholesale prices.",
)
@click.option("--discount", default="0", help="Discount in TND.")
@click.option("--lang", default="fr", type=LANGUAGE_CHOICE, help="Display language.")
def checkout_quote(
    items: str,
    governorate: str | None,
    payment: str,
    wholesale_status: str,
    discount: str,
    lang: str,
) -> None:
    """Show the checkout totals for a cart."""
    wholesale = can_see_wholesale_prices(wholesale_status)
    specs = _parse_items(items)
    handler = QuoteCheckoutHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            specs,
            governorate,
            PaymentMethod(payment),
            wholesale,
            discount=discount,
            language=Language(lang),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_quote(dto)


@click.command("place")
@click.option("--items", required=True, help="Cart as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--governorate", required=True, type=GOVERNORATE_CHOICE, help="Destination.")
@click.option("--payment", required=True, type=PAYMENT_CHOICE, help="Payment method.")
@click.option("--name", "full_name", required=True, help="Recipient full name.")
@click.option("--phone", required=True, help="Tunisian phone number.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--postal-code", default=None, help="Postal code.")
@click.option("--user-id", default=None, help="Registered account ID (omit for guest).")
@click.option("--email", default=None, help="Guest email.")
@click.option(
    "--wholesale-status",
    default="none",
    type=WHOLESALE_STATUS_CHOICE,
    help="Account wholesale status; only approved accounts get wholesale prices.",
)
@click.option("--discount", default="0", help="Discount in TND.")
@click.option("--notes", default=None, help="Free-text note for the order.")
@click.option("--lang", default="fr", type=LANGUAGE_CHOICE, help="Display language.")
def checkout_place(
    items: str,
    governorate: str,
    payment: str,
    full_name: str,
    phone: str,
    address: str,
    city: str,
    postal_code: str | None,
    user_id: str | None,
    email: str | None,
    wholesale_status: str,
    discount: str,
    notes: str | None,
    lang: str,
) -> None:
    """Place an order (validates and decrements stock atomically)."""
    specs = _parse_items(items)
    wholesale = can_see_wholesale_prices(wholesale_status)
    language = Language(lang)
    method = PaymentMethod(payment)
    quote = QuoteCheckoutHandler(product_repo=product_repository())

    try:
        shipping_address = ShippingAddress.create(
            full_name=full_name,
            phone=phone,
            address_line1=address,
            city=city,
            governorate=governorate,
            postal_code=postal_code,
        )
        cart = quote.resolve_cart(specs)
        totals = quote.totals(cart, governorate, method, wholesale, Money.of(discount))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    account = AccountContext(
        user_id=user_id,
        is_wholesale=wholesale,
        guest_email=email,
        guest_phone=None if user_id else phone,
    )
    handler = SubmitOrderHandler(gateway=order_gateway())
    submit = {
        PaymentMethod.COD: handler.submit_cod,
        PaymentMethod.BANK_TRANSFER: handler.submit_bank_transfer,
        PaymentMethod.FLOUCI: handler.submit_flouci,
    }[method]
    result = submit(cart, shipping_address, totals, wholesale, account, notes)

    if not result.success:
        raise click.ClickException(f"[{result.error_kind.value}] {result.error}")

    click.echo(f"Order {result.order_number} created  (id={result.order_id})")
    click.echo(f"Status:  {ORDER_STATUS_LABELS[OrderStatus.PENDING][language]}")
    click.echo(f"Payment: {PAYMENT_METHODS[method].name[language]}")
    click.echo(f"Phone:   {format_phone(shipping_address.phone)}")
    click.echo(f"Total:   {totals.total.format(language)}")


@click.command("orders")
@click.option("--lang", default="fr", type=LANGUAGE_CHOICE, help="Display language.")
def checkout_orders(lang: str) -> None:
    """List the orders placed so far."""
    language = Language(lang)
    orders = order_gateway().list_orders()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<20} {'Customer':<22} {'Status':<16} {'Total':>14}")
    click.echo("-" * 75)
    for o in orders:
        status = ORDER_STATUS_LABELS[OrderStatus(o["status"])][language]
        total = Money.of(o["total"]).format(language)
        click.echo(
            f"{o['order_number']:<20} {o['customer_name']:<22} {status:<16} {total:>14}"
        )
