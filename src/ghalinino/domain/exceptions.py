"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the application and CLI layers can catch them uniformly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghalinino.domain.repository.order_gateway import FailureReason


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(ValidationError):
    """A product does not have enough stock for the requested quantity."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Requested: {requested}, Available: {available}"
        )


class OrderGatewayError(DomainException):
    """The remote order-creation call failed.

    ``reason`` is the structured failure code when the remote side supplies
    one; ``None`` means only the free-text message is available.
    """

    def __init__(self, message: str, reason: FailureReason | None = None) -> None:
        super().__init__(message)
        self.reason = reason
