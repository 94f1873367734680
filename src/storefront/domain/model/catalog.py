"""MealComponent: the orderable unit of a tenant's menu.

Meals are made of components (a portion of ndole, a side of plantains);
clients put components, not meals, into their cart.  Components live in
the tenant's catalog and change independently of carts: a cook may
reprice them or mark them sold out at any time.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money

# Fallback ceiling when a component has neither stock tracking nor a
# cook-defined maximum.
UNLIMITED_SELECTABLE = 99


@dataclass
class MealComponent:

    id: str
    tenant_id: str
    meal_id: str
    meal_name: str
    name: str
    price: Money
    unit: str = ""
    available: bool = True
    stock: int | None = None  # None = not tracked
    max_quantity: int | None = None  # None = no cook-defined limit

    @property
    def is_sold_out(self) -> bool:
        return not self.available or (self.stock is not None and self.stock <= 0)

    @property
    def max_selectable(self) -> int:
        """Lesser of available stock and cook-defined max, never below 1."""
        limits = [
            limit for limit in (self.max_quantity, self.stock) if limit is not None
        ]
        if not limits:
            return UNLIMITED_SELECTABLE
        return max(1, min(limits))
