"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from ghalinino.application.add_product import AddProductHandler
from ghalinino.domain.exceptions import DomainException
from ghalinino.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name-fr", required=True, help="French name.")
@click.option("--name-ar", required=True, help="Arabic name.")
@click.option("--price", required=True, help="Retail price in TND (e.g. 12.500).")
@click.option("--wholesale-price", default=None, help="Wholesale price in TND.")
@click.option("--compare-at-price", default=None, help="Former price shown struck through.")
@click.option(
    "--wholesale-min-quantity",
    default=1,
    type=int,
    help="Units shown to wholesale buyers as the minimum per product.",
)
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--image", "images", multiple=True, help="Image URL (repeatable).")
def product_add(
    product_id: str,
    name_fr: str,
    name_ar: str,
    price: str,
    wholesale_price: str | None,
    compare_at_price: str | None,
    wholesale_min_quantity: int,
    stock: int,
    images: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id,
            name_fr=name_fr,
            name_ar=name_ar,
            price=price,
            stock=stock,
            wholesale_price=wholesale_price,
            images=list(images),
            wholesale_min_quantity=wholesale_min_quantity,
            compare_at_price=compare_at_price,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.id}' ({product.name_fr}) added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<10} {'Name':<24} {'Price':>14} {'Wholesale':>14} {'Min':>5} {'Stock':>6}"
    )
    click.echo("-" * 78)
    for p in products:
        wholesale = str(p.wholesale_price) if p.wholesale_price is not None else "-"
        name = p.name_fr
        if p.is_discounted:
            name += " (promo)"
        if not p.is_active:
            name += " (inactive)"
        click.echo(
            f"{p.id:<10} {name:<24} {str(p.price):>14} {wholesale:>14} "
            f"{p.wholesale_min_quantity:>5} {p.stock_quantity:>6}"
        )
