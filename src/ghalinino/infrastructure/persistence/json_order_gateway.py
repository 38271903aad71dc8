"""JSON-file-backed implementation of the atomic order-creation call.

Plays the role of the platform's ``create_order`` procedure for local
runs: it validates stock for every line, decrements it, appends the order
with a generated id and order number, and returns both. Either all of
that happens or none of it does.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from ghalinino.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    OrderGatewayError,
    ValidationError,
)
from ghalinino.domain.model.order import OrderSubmission
from ghalinino.domain.model.product import CatalogProduct
from ghalinino.domain.repository.order_gateway import (
    CreatedOrder,
    FailureReason,
    OrderGateway,
)
from ghalinino.domain.repository.product_repository import ProductRepository
from ghalinino.domain.service.stock_allocation_service import StockAllocationService
from ghalinino.infrastructure.persistence.create_order_schema import (
    parse_create_order_response,
    to_create_order_params,
)

logger = logging.getLogger(__name__)

# Raised by the JSON files when they are missing, unreadable or hand-edited.
_UNREADABLE = (OSError, ValueError, KeyError, ArithmeticError)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_order_number(day: datetime, sequence: int) -> str:
    """``ORD-YYYYMMDD-NNNN`` where NNNN is the order's rank within the day."""
    return f"ORD-{day:%Y%m%d}-{sequence:04d}"


class JsonOrderGateway(OrderGateway):

    def __init__(
        self,
        file_path: Path,
        product_repo: ProductRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._file_path = file_path
        self._product_repo = product_repo
        self._clock = clock
        self._ensure_file()

    # --- OrderGateway interface -----------------------------------------------

    def create_order(self, submission: OrderSubmission) -> CreatedOrder:
        params = to_create_order_params(submission)
        stock = StockAllocationService(self._product_repo)

        # Validate every line before anything is written.
        try:
            allocation = stock.check_availability(submission.items)
        except InsufficientStockError as exc:
            raise OrderGatewayError(str(exc), FailureReason.INSUFFICIENT_STOCK) from exc
        except EntityNotFoundError as exc:
            raise OrderGatewayError(str(exc), FailureReason.PRODUCT_NOT_FOUND) from exc
        except ValidationError as exc:
            raise OrderGatewayError(str(exc), FailureReason.PRODUCT_INACTIVE) from exc
        except _UNREADABLE as exc:
            raise OrderGatewayError(
                f"Product catalog unavailable: {exc}", FailureReason.UNAVAILABLE
            ) from exc

        now = self._clock()
        try:
            orders = self._load_raw()
            sequence = self._orders_on(orders, now) + 1
        except OSError as exc:
            raise OrderGatewayError(
                f"Order storage unavailable: {exc}", FailureReason.UNAVAILABLE
            ) from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise OrderGatewayError(
                f"Order storage is corrupt: {exc}", FailureReason.MALFORMED_RESPONSE
            ) from exc

        order_id = str(uuid.uuid4())
        order_number = format_order_number(now, sequence)
        record = {
            "id": order_id,
            "order_number": order_number,
            "created_at": now.isoformat(),
            **params["p_order_data"],
            "items": params["p_items"],
        }

        originals = [copy.copy(product) for product, _ in allocation]
        try:
            stock.apply(allocation)
            self._persist_raw(orders + [record])
        except _UNREADABLE as exc:
            self._rollback(originals, orders)
            raise OrderGatewayError(
                f"Order storage unavailable: {exc}", FailureReason.UNAVAILABLE
            ) from exc

        logger.debug("Stored order %s with %d item(s)", order_number, len(params["p_items"]))
        return parse_create_order_response(
            {"success": True, "order_id": order_id, "order_number": order_number}
        )

    # --- Queries --------------------------------------------------------------

    def list_orders(self) -> list[dict]:
        return self._load_raw()

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _orders_on(orders: list[dict], day: datetime) -> int:
        return sum(
            1
            for o in orders
            if datetime.fromisoformat(o["created_at"]).date() == day.date()
        )

    def _rollback(self, products: list[CatalogProduct], orders: list[dict]) -> None:
        try:
            for product in products:
                self._product_repo.save(product)
            self._persist_raw(orders)
        except _UNREADABLE:
            logger.exception("Rollback of a failed order left storage inconsistent")

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        orders = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not isinstance(orders, list):
            raise ValueError(f"expected a list of orders, got {type(orders).__name__}")
        return orders

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
