"""OrderSummary: the priced view of a checkout.

Derived, never edited.  It is recomputed whenever the cart, the delivery
selection or the promo state changes, and frozen onto the Order when the
client places it.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import PriceChange
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderSummary:
    """Totals for a checkout.

    ``delivery_fee`` and ``grand_total`` are None while a delivery order
    has no resolved quarter fee; such a summary is not final.
    """

    subtotal: Money
    delivery_fee: Money | None
    discount: Money
    grand_total: Money | None
    minimum_order_amount: Money
    below_minimum: bool
    amount_needed: Money
    item_count: int
    delivery_method: DeliveryMethod | None = None
    promo_code: str | None = None
    price_changes: tuple[PriceChange, ...] = ()

    @property
    def is_final(self) -> bool:
        return self.delivery_fee is not None and self.grand_total is not None

    @property
    def can_proceed_to_payment(self) -> bool:
        return self.is_final and self.item_count > 0 and not self.below_minimum
