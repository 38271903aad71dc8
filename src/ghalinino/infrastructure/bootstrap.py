"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The gateway is built once
per process and injected into the handlers that need it.
"""

from __future__ import annotations

from functools import lru_cache

from ghalinino.infrastructure.config import Settings, get_settings
from ghalinino.infrastructure.persistence.json_order_gateway import JsonOrderGateway
from ghalinino.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return get_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


@lru_cache(maxsize=1)
def order_gateway() -> JsonOrderGateway:
    return JsonOrderGateway(
        settings().data_dir / "orders.json",
        product_repo=product_repository(),
    )
