"""PromoCode aggregate: a tenant's discount code and its redemption limits."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money

CODE_PATTERN = re.compile(r"^[A-Z0-9]{3,20}$")
MIN_PERCENTAGE = 1
MAX_PERCENTAGE = 100
MIN_FIXED = 1
MAX_FIXED = 100_000
MAX_MINIMUM_ORDER = 100_000


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PromoStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def normalize_code(raw: str) -> str:
    """Promo codes match case-insensitively; the canonical form is upper-case."""
    return (raw or "").strip().upper()


@dataclass
class PromoCode:
    """A discount code.

    ``max_uses`` and ``max_uses_per_client`` of 0 mean unlimited;
    ``ends_at`` of None means the code never expires.  ``ends_at`` is
    inclusive: the code still works on that day.
    """

    tenant_id: str
    code: str
    discount_type: DiscountType
    value: int
    starts_at: date
    ends_at: date | None = None
    minimum_order_amount: Money = field(default_factory=Money.zero)
    status: PromoStatus = PromoStatus.ACTIVE
    max_uses: int = 0
    max_uses_per_client: int = 0
    times_used: int = 0

    # --- Factory (used for NEW codes only) ------------------------------------

    @staticmethod
    def create(
        tenant_id: str,
        code: str,
        discount_type: DiscountType,
        value: int,
        starts_at: date,
        ends_at: date | None = None,
        minimum_order_amount: Money | None = None,
        max_uses: int = 0,
        max_uses_per_client: int = 0,
        currency: str = DEFAULT_CURRENCY,
    ) -> PromoCode:
        """Create a new promo code, enforcing the cook-side creation rules."""
        canonical = normalize_code(code)
        if not CODE_PATTERN.match(canonical):
            raise ValidationError(
                "The promo code must be 3 to 20 letters and numbers."
            )

        if discount_type is DiscountType.PERCENTAGE:
            if not MIN_PERCENTAGE <= value <= MAX_PERCENTAGE:
                raise ValidationError("Percentage discount must be between 1 and 100.")
        elif not MIN_FIXED <= value <= MAX_FIXED:
            raise ValidationError(
                f"Fixed discount must be between {MIN_FIXED} and {MAX_FIXED:,}."
            )

        minimum = minimum_order_amount or Money.zero(currency)
        if minimum.amount > MAX_MINIMUM_ORDER:
            raise ValidationError(
                f"Minimum order amount cannot exceed {MAX_MINIMUM_ORDER:,}."
            )

        if ends_at is not None and ends_at < starts_at:
            raise ValidationError("The end date must be on or after the start date.")

        if max_uses < 0 or max_uses_per_client < 0:
            raise ValidationError("Usage limits cannot be negative.")

        return PromoCode(
            tenant_id=tenant_id,
            code=canonical,
            discount_type=discount_type,
            value=value,
            starts_at=starts_at,
            ends_at=ends_at,
            minimum_order_amount=minimum,
            max_uses=max_uses,
            max_uses_per_client=max_uses_per_client,
        )

    # --- Pricing --------------------------------------------------------------

    def discount_for(self, food_subtotal: Money) -> Money:
        """Discount on the food subtotal; never more than the subtotal itself."""
        if self.discount_type is DiscountType.PERCENTAGE:
            discount = food_subtotal.percent(self.value)
        else:
            discount = Money(self.value, food_subtotal.currency)
        return discount.min(food_subtotal)

    # --- Redemption -----------------------------------------------------------

    @property
    def is_exhausted(self) -> bool:
        return self.max_uses > 0 and self.times_used >= self.max_uses

    def record_use(self) -> None:
        self.times_used += 1

    @property
    def label(self) -> str:
        if self.discount_type is DiscountType.PERCENTAGE:
            return f"{self.value}% off"
        return f"{Money(self.value, self.minimum_order_amount.currency)} off"


@dataclass(frozen=True)
class AppliedPromo:
    """The single promo code currently attached to a checkout."""

    code: str
    discount: Money
