"""Expected, recoverable checkout conditions.

A ``Problem`` is returned (never raised) whenever a client action cannot
complete for a business reason the client can fix: another quarter,
another promo code, more items in the cart. Each kind maps to one inline
message in the checkout UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProblemKind(Enum):
    # Delivery
    QUARTER_UNAVAILABLE = "quarter_unavailable"
    DELIVERY_METHOD_UNAVAILABLE = "delivery_method_unavailable"
    PICKUP_LOCATION_UNAVAILABLE = "pickup_location_unavailable"
    DELIVERY_NOT_SELECTED = "delivery_not_selected"

    # Promo codes
    PROMO_NOT_FOUND = "promo_not_found"
    PROMO_INACTIVE = "promo_inactive"
    PROMO_NOT_STARTED = "promo_not_started"
    PROMO_EXPIRED = "promo_expired"
    PROMO_USAGE_EXHAUSTED = "promo_usage_exhausted"
    PROMO_CLIENT_LIMIT_REACHED = "promo_client_limit_reached"
    PROMO_MINIMUM_NOT_MET = "promo_minimum_not_met"

    # Cart and totals
    BELOW_MINIMUM_ORDER = "below_minimum_order"
    STALE_CART_STATE = "stale_cart_state"
    CART_EMPTY = "cart_empty"
    CART_FULL = "cart_full"
    ITEM_UNAVAILABLE = "item_unavailable"
    ITEM_NOT_IN_CART = "item_not_in_cart"
    ORDER_TOTAL_ZERO = "order_total_zero"

    # Contact and scheduling
    PHONE_REQUIRED = "phone_required"
    INVALID_PHONE = "invalid_phone"
    INVALID_SCHEDULE = "invalid_schedule"

    # Payment
    PAYMENT_NOT_SELECTED = "payment_not_selected"
    WALLET_UNAVAILABLE = "wallet_unavailable"
    WALLET_INSUFFICIENT = "wallet_insufficient"

    @property
    def is_promo(self) -> bool:
        return self.value.startswith("promo_")


@dataclass(frozen=True)
class Problem:
    """A typed, user-facing reason an action did not go through.

    ``details`` carries data the UI needs to offer a way out, e.g. the
    amount still needed to reach a minimum or the cook's contact numbers.
    """

    kind: ProblemKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message
