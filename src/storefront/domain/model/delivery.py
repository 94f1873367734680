"""Delivery configuration of a tenant: towns, quarters, fee groups, pickup points.

A quarter is the finest unit a cook assigns a delivery fee to.  The fee
either comes from the quarter itself or, when the quarter belongs to a
fee group, from the group (the group fee wins).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.model.value_objects import Money


class DeliveryMethod(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


@dataclass(frozen=True)
class Town:
    id: str
    name: str


@dataclass(frozen=True)
class FeeGroup:
    """A set of quarters sharing one delivery fee."""

    id: str
    name: str
    fee: Money


@dataclass(frozen=True)
class DeliveryQuarter:
    id: str
    name: str
    town_id: str
    individual_fee: Money = field(default_factory=Money.zero)
    fee_group_id: str | None = None
    available: bool = True


@dataclass(frozen=True)
class PickupLocation:
    id: str
    name: str
    address: str = ""
    instructions: str = ""


@dataclass(frozen=True)
class DeliveryFeeQuote:
    """Outcome of resolving a quarter's fee.

    ``fee`` is None exactly when ``available`` is False.  A zero fee is
    a valid quote ("free delivery"), never an error.
    """

    quarter_id: str
    available: bool
    fee: Money | None
    quarter_name: str | None = None
    town_name: str | None = None

    @property
    def is_free(self) -> bool:
        return self.available and self.fee is not None and self.fee.is_zero

    @property
    def display_text(self) -> str:
        if not self.available:
            return "Delivery is not available to this quarter."
        label = "Free delivery" if self.is_free else str(self.fee)
        if self.quarter_name:
            return f"Delivery to {self.quarter_name}: {label}"
        return label


@dataclass
class DeliveryAreas:
    """Everything a tenant configured about where and how it hands over food."""

    towns: list[Town] = field(default_factory=list)
    quarters: list[DeliveryQuarter] = field(default_factory=list)
    fee_groups: list[FeeGroup] = field(default_factory=list)
    pickup_locations: list[PickupLocation] = field(default_factory=list)

    @property
    def offers_delivery(self) -> bool:
        return any(q.available for q in self.quarters)

    @property
    def offers_pickup(self) -> bool:
        return bool(self.pickup_locations)

    def offers(self, method: DeliveryMethod) -> bool:
        if method is DeliveryMethod.DELIVERY:
            return self.offers_delivery
        return self.offers_pickup

    def fee_for(self, quarter_id: str) -> DeliveryFeeQuote:
        """Resolve the delivery fee for a quarter.  Pure lookup."""
        quarter = self.quarter(quarter_id)
        if quarter is None or not quarter.available:
            return DeliveryFeeQuote(
                quarter_id=quarter_id,
                available=False,
                fee=None,
                quarter_name=quarter.name if quarter else None,
                town_name=self._town_name(quarter.town_id) if quarter else None,
            )

        fee = quarter.individual_fee
        if quarter.fee_group_id is not None:
            group = self._fee_group(quarter.fee_group_id)
            if group is not None:
                fee = group.fee

        return DeliveryFeeQuote(
            quarter_id=quarter.id,
            available=True,
            fee=fee,
            quarter_name=quarter.name,
            town_name=self._town_name(quarter.town_id),
        )

    def quarter(self, quarter_id: str) -> DeliveryQuarter | None:
        for quarter in self.quarters:
            if quarter.id == quarter_id:
                return quarter
        return None

    def quarters_in(self, town_id: str) -> list[DeliveryQuarter]:
        return sorted(
            (q for q in self.quarters if q.town_id == town_id),
            key=lambda q: q.name,
        )

    def pickup_location(self, location_id: str) -> PickupLocation | None:
        for location in self.pickup_locations:
            if location.id == location_id:
                return location
        return None

    # --- Internal helpers -----------------------------------------------------

    def _fee_group(self, group_id: str) -> FeeGroup | None:
        for group in self.fee_groups:
            if group.id == group_id:
                return group
        return None

    def _town_name(self, town_id: str) -> str | None:
        for town in self.towns:
            if town.id == town_id:
                return town.name
        return None
