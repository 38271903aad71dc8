import logging

import click

from ghalinino.infrastructure.bootstrap import settings
from ghalinino.infrastructure.cli.checkout_commands import (
    checkout_orders,
    checkout_place,
    checkout_quote,
)
from ghalinino.infrastructure.cli.product_commands import product_add, product_list
from ghalinino.infrastructure.cli.shipping_commands import shipping_fee_cmd, shipping_zones


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Ghalinino — checkout pricing and order submission"""
    level = logging.DEBUG if verbose else settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def checkout() -> None:
    """Quote and place orders."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


@cli.group()
def shipping() -> None:
    """Inspect shipping tariffs."""


# Register subcommands
checkout.add_command(checkout_orders)
checkout.add_command(checkout_place)
checkout.add_command(checkout_quote)
product.add_command(product_add)
product.add_command(product_list)
shipping.add_command(shipping_fee_cmd)
shipping.add_command(shipping_zones)
