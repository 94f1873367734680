"""CheckoutSession: the client's in-progress choices for one tenant.

Nothing here is an Order yet.  The session lives next to the cart and
survives navigation between checkout steps; it is discarded once payment
succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.payment import PaymentSelection
from storefront.domain.model.promo import AppliedPromo
from storefront.domain.model.value_objects import Money, PhoneNumber


@dataclass(frozen=True)
class DeliveryLocation:
    """A chosen quarter, with the fee resolved when it was chosen."""

    town_id: str
    quarter_id: str
    neighbourhood: str
    fee: Money | None


@dataclass
class CheckoutSession:

    session_key: str
    tenant_id: str
    delivery_method: DeliveryMethod | None = None
    delivery_location: DeliveryLocation | None = None
    pickup_location_id: str | None = None
    phone: PhoneNumber | None = None
    scheduled_for: date | None = None
    applied_promo: AppliedPromo | None = None
    payment: PaymentSelection | None = None

    # --- Promo state machine: NoCode -> Applied -> (Removed | Submitted) -----

    def apply_promo(self, promo: AppliedPromo) -> None:
        """Attach a promo code, replacing any code already applied."""
        self.applied_promo = promo

    def remove_promo(self) -> None:
        self.applied_promo = None

    # --- Derived --------------------------------------------------------------

    @property
    def delivery_fee(self) -> Money | None:
        """The chosen quarter's fee while delivering, else None.

        Pickup is free; the total aggregator prices it in the tenant's currency.
        """
        if self.delivery_method is DeliveryMethod.DELIVERY and self.delivery_location:
            return self.delivery_location.fee
        return None

    @property
    def discount(self) -> Money | None:
        return self.applied_promo.discount if self.applied_promo else None
