"""Abstract gateway to the remote atomic order-creation call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ghalinino.domain.model.order import OrderSubmission


class FailureReason(Enum):
    """Structured failure codes returned alongside the remote error message."""

    INSUFFICIENT_STOCK = "insufficient_stock"
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_INACTIVE = "product_inactive"
    MALFORMED_RESPONSE = "malformed_response"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CreatedOrder:
    order_id: str
    order_number: str


class OrderGateway(ABC):

    @abstractmethod
    def create_order(self, submission: OrderSubmission) -> CreatedOrder:
        """Create the order header and all line items as one unit of work.

        Stock is validated and decremented in the same operation. On any
        failure nothing is written and ``OrderGatewayError`` is raised.
        """
