"""Wholesale account rules.

Approval itself happens in the admin workflow; this module only answers
whether an account may buy at wholesale prices and whether its cart
reaches the wholesale minimum.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ghalinino.domain.model.value_objects import Money


class WholesaleStatus(Enum):
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


WHOLESALE_MINIMUM_ORDER = Money(Decimal("100.000"))


def can_see_wholesale_prices(status: WholesaleStatus | str | None) -> bool:
    if status is None:
        return False
    if isinstance(status, str):
        return status == WholesaleStatus.APPROVED.value
    return status is WholesaleStatus.APPROVED


@dataclass(frozen=True)
class WholesaleMinimumCheck:
    minimum_met: bool
    minimum_required: Money
    amount_short: Money


def check_wholesale_minimum(subtotal: Money, is_wholesale: bool) -> WholesaleMinimumCheck:
    """Retail carts have no minimum; wholesale carts need WHOLESALE_MINIMUM_ORDER."""
    if not is_wholesale:
        return WholesaleMinimumCheck(True, Money.zero(), Money.zero())
    if subtotal >= WHOLESALE_MINIMUM_ORDER:
        return WholesaleMinimumCheck(True, WHOLESALE_MINIMUM_ORDER, Money.zero())
    return WholesaleMinimumCheck(
        False, WHOLESALE_MINIMUM_ORDER, WHOLESALE_MINIMUM_ORDER - subtotal
    )
