"""Tenant aggregate: a cook's storefront and its checkout settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.delivery import DeliveryAreas
from storefront.domain.model.value_objects import Money


@dataclass
class Tenant:

    id: str
    name: str
    minimum_order_amount: Money = field(default_factory=Money.zero)
    whatsapp: str | None = None
    phone: str | None = None
    delivery_areas: DeliveryAreas = field(default_factory=DeliveryAreas)

    @property
    def has_contact(self) -> bool:
        return bool(self.whatsapp or self.phone)

    def contact_details(self) -> dict[str, str | None]:
        return {"brand_name": self.name, "whatsapp": self.whatsapp, "phone": self.phone}

    def whatsapp_message(self, quarter_name: str, town_name: str) -> str:
        """Pre-filled message for clients outside the delivery areas."""
        return (
            f"Hi {self.name}, I'd like to order but I'm in {quarter_name}, "
            f"{town_name}. Is delivery to my area possible?"
        )
