"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "XAF"


@dataclass(frozen=True)
class Money:
    """Monetary amount in the currency's smallest whole unit.

    Storefront currencies (XAF) have no fractional part, so the amount is
    a plain non-negative ``int``.
    """

    amount: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def percent(self, rate: int) -> Money:
        """Return ``rate`` percent of this amount, rounded half-up."""
        raw = Decimal(self.amount) * Decimal(rate) / Decimal(100)
        return Money(int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP)), self.currency)

    def min(self, other: Money) -> Money:
        return other if other < self else self

    def saturating_sub(self, other: Money) -> Money:
        """Subtract, stopping at zero instead of raising."""
        self._assert_same_currency(other)
        return Money(max(0, self.amount - other.amount), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:,} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | int, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that accepts ints and numeric strings like ``"5,000"``."""
        if isinstance(amount, str):
            cleaned = amount.replace(",", "").strip()
            if not cleaned.isdigit():
                raise ValidationError(f"Invalid money amount: {amount!r}")
            return Money(int(cleaned), currency)
        return Money(amount, currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(0, currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a cart line never holds zero or negative
    portions.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


_PHONE_NOISE = re.compile(r"[\s\-()]")
_LOCAL_PHONE = re.compile(r"^6\d{8}$")


@dataclass(frozen=True)
class PhoneNumber:
    """A Cameroon mobile number stored as ``+2376XXXXXXXX``."""

    value: str

    def __post_init__(self) -> None:
        if not self.value.startswith("+237") or not _LOCAL_PHONE.match(self.value[4:]):
            raise ValidationError(
                "Please enter a valid Cameroon phone number (+237 followed by 9 digits)."
            )

    @property
    def local(self) -> str:
        return self.value[4:]

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(raw: str) -> PhoneNumber:
        """Normalize user input (spaces, dashes, optional country code)."""
        normalized = _PHONE_NOISE.sub("", raw or "")
        if normalized.startswith("+237"):
            normalized = normalized[4:]
        elif normalized.startswith("237") and len(normalized) == 12:
            normalized = normalized[3:]
        return PhoneNumber(f"+237{normalized}")
