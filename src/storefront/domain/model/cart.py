"""Cart aggregate: the client's session-scoped basket for one tenant.

All mutations go through four operations: ``add``, ``set_quantity``,
``remove`` and ``clear``.  Expected refusals (sold out, cart full, unknown
line) come back as a ``Problem``; ``None`` means the mutation happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.catalog import MealComponent
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity

MAX_CART_LINES = 50


@dataclass
class CartLine:
    """One component in the cart, with the price seen when it was added."""

    component_id: str
    meal_id: str
    meal_name: str
    name: str
    unit_price: Money
    quantity: Quantity
    unit: str = ""
    max_quantity: int = 99

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class MealGroup:
    """Read-only view of the cart lines that belong to one meal."""

    meal_id: str
    meal_name: str
    lines: tuple[CartLine, ...]

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.lines[0].unit_price.currency)
        for line in self.lines:
            result = result + line.line_total
        return result


@dataclass(frozen=True)
class PriceChange:
    """A component whose live price differs from the price in the cart."""

    component_id: str
    name: str
    old_price: Money
    new_price: Money


@dataclass
class Cart:

    session_key: str
    tenant_id: str
    lines: list[CartLine] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY

    # --- Mutations ------------------------------------------------------------

    def add(self, component: MealComponent, quantity: int = 1) -> Problem | None:
        """Add a component, or bump its quantity if it is already in the cart."""
        if component.is_sold_out:
            return Problem(ProblemKind.ITEM_UNAVAILABLE, "This item is sold out.")

        ceiling = component.max_selectable
        existing = self._find(component.id)
        if existing is not None:
            existing.quantity = Quantity(_clamp(existing.quantity.value + quantity, ceiling))
            existing.unit_price = component.price
            existing.max_quantity = ceiling
            return None

        if len(self.lines) >= MAX_CART_LINES:
            return Problem(
                ProblemKind.CART_FULL,
                f"Cart is full. Maximum {MAX_CART_LINES} items allowed.",
                {"max": MAX_CART_LINES},
            )

        self.lines.append(
            CartLine(
                component_id=component.id,
                meal_id=component.meal_id,
                meal_name=component.meal_name,
                name=component.name,
                unit_price=component.price,
                quantity=Quantity(_clamp(quantity, ceiling)),
                unit=component.unit,
                max_quantity=ceiling,
            )
        )
        return None

    def set_quantity(self, component_id: str, quantity: int) -> Problem | None:
        """Set a line's quantity; zero or less removes the line."""
        line = self._find(component_id)
        if line is None:
            return Problem(ProblemKind.ITEM_NOT_IN_CART, "Item not found in cart.")
        if quantity <= 0:
            self.lines.remove(line)
            return None
        line.quantity = Quantity(_clamp(quantity, line.max_quantity))
        return None

    def remove(self, component_id: str) -> None:
        self.lines = [line for line in self.lines if line.component_id != component_id]

    def clear(self) -> None:
        self.lines = []

    def reprice(self, components: dict[str, MealComponent]) -> list[PriceChange]:
        """Align line prices with the live catalog and report what moved.

        Lines whose component vanished from the catalog are left alone;
        order placement rejects them separately.
        """
        changes: list[PriceChange] = []
        for line in self.lines:
            component = components.get(line.component_id)
            if component is None or component.price == line.unit_price:
                continue
            changes.append(
                PriceChange(
                    component_id=line.component_id,
                    name=component.name,
                    old_price=line.unit_price,
                    new_price=component.price,
                )
            )
            line.unit_price = component.price
        return changes

    # --- Computed properties --------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def subtotal(self) -> Money:
        currency = self.lines[0].unit_price.currency if self.lines else self.currency
        result = Money.zero(currency)
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def meal_groups(self) -> list[MealGroup]:
        grouped: dict[str, list[CartLine]] = {}
        for line in self.lines:
            grouped.setdefault(line.meal_id, []).append(line)
        return [
            MealGroup(meal_id=meal_id, meal_name=lines[0].meal_name, lines=tuple(lines))
            for meal_id, lines in grouped.items()
        ]

    def component_ids(self) -> list[str]:
        return [line.component_id for line in self.lines]

    # --- Internal helpers -----------------------------------------------------

    def _find(self, component_id: str) -> CartLine | None:
        for line in self.lines:
            if line.component_id == component_id:
                return line
        return None


def _clamp(quantity: int, ceiling: int) -> int:
    return max(1, min(quantity, ceiling))
