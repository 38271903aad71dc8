"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from ghalinino.domain.exceptions import ValidationError

# The Tunisian dinar is divided into 1000 millimes.
MILLIMES_PER_DINAR = 1000
_MILLIME = Decimal("0.001")


class Language(Enum):
    AR = "ar"
    FR = "fr"


_CURRENCY_SYMBOLS = {
    Language.AR: "د.ت",
    Language.FR: "TND",
}


@dataclass(frozen=True)
class Money:
    """Monetary amount in Tunisian dinars.

    The amount is a Decimal quantized to the millime. All arithmetic goes
    through integer millimes, so no binary floating-point value ever takes
    part in a monetary calculation.
    """

    amount: Decimal
    currency: str = "TND"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(
            self, "amount", self.amount.quantize(_MILLIME, rounding=ROUND_HALF_UP)
        )

    # --- Fixed-point view -----------------------------------------------------

    @property
    def millimes(self) -> int:
        """The amount as an integer number of millimes."""
        return int(self.amount * MILLIMES_PER_DINAR)

    @property
    def is_zero(self) -> bool:
        return self.millimes == 0

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money.from_millimes(self.millimes + other.millimes, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.millimes - other.millimes
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money.from_millimes(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money.from_millimes(self.millimes * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.millimes < other.millimes

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.millimes <= other.millimes

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.millimes > other.millimes

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.millimes >= other.millimes

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.3f} {self.currency}"

    def format(self, language: Language = Language.FR) -> str:
        """Format for display, e.g. ``157.000 TND`` or ``157.000 د.ت``."""
        return f"{self.amount:.3f} {_CURRENCY_SYMBOLS[language]}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def from_millimes(millimes: int, currency: str = "TND") -> Money:
        return Money(Decimal(millimes) / MILLIMES_PER_DINAR, currency)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
