"""Order aggregate: what a checkout becomes once the client places it.

The Order owns a snapshot of the cart lines and the frozen OrderSummary.
Prices, fees and discounts never change after placement; only the
payment status moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStateTransition, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.payment import PaymentSelection
from storefront.domain.model.summary import OrderSummary
from storefront.domain.model.value_objects import Money, PhoneNumber, Quantity


class OrderStatus(Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    PAYMENT_FAILED = "payment_failed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures a cart line at placement time (price lock)."""

    component_id: str
    meal_name: str
    name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLineItem:
        return OrderLineItem(
            component_id=line.component_id,
            meal_name=line.meal_name,
            name=line.name,
            quantity=line.quantity,
            unit_price=line.unit_price,
        )


@dataclass(frozen=True)
class Handover:
    """Where the food changes hands: a delivery quarter or a pickup point."""

    method: DeliveryMethod
    town_id: str | None = None
    quarter_id: str | None = None
    neighbourhood: str | None = None
    pickup_location_id: str | None = None


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders; it enforces placement rules.
    ``__init__`` stays simple so repositories can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    tenant_id: str
    client_id: str
    items: list[OrderLineItem]
    summary: OrderSummary
    handover: Handover
    phone: PhoneNumber
    payment: PaymentSelection
    scheduled_for: date | None = None
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    paid_at: datetime | None = None
    cancelled_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        tenant_id: str,
        client_id: str,
        lines: list[CartLine],
        summary: OrderSummary,
        handover: Handover,
        phone: PhoneNumber,
        payment: PaymentSelection,
        scheduled_for: date | None = None,
    ) -> Order:
        """Create a pending-payment order from a fully validated checkout."""
        if not lines:
            raise ValidationError("Order must contain at least one item")
        if not summary.is_final:
            raise ValidationError("Order totals are not final; delivery fee unresolved")
        if summary.below_minimum:
            raise ValidationError(
                f"Order subtotal below minimum {summary.minimum_order_amount}"
            )

        return Order(
            id=None,
            tenant_id=tenant_id,
            client_id=client_id,
            items=[OrderLineItem.from_cart_line(line) for line in lines],
            summary=summary,
            handover=handover,
            phone=phone,
            payment=payment,
            scheduled_for=scheduled_for,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, when: datetime | None = None) -> None:
        """PENDING_PAYMENT|PAYMENT_FAILED -> PAID."""
        if self.status not in (OrderStatus.PENDING_PAYMENT, OrderStatus.PAYMENT_FAILED):
            raise InvalidStateTransition(
                f"Cannot mark order as paid, current status is {self.status.value}"
            )
        self.status = OrderStatus.PAID
        self.paid_at = when or datetime.now(timezone.utc)

    def mark_payment_failed(self) -> None:
        if self.status != OrderStatus.PENDING_PAYMENT:
            raise InvalidStateTransition(
                f"Cannot record a failed payment, current status is {self.status.value}"
            )
        self.status = OrderStatus.PAYMENT_FAILED

    def cancel(self, when: datetime | None = None) -> None:
        """PENDING_PAYMENT|PAYMENT_FAILED -> CANCELLED."""
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStateTransition("Order is already cancelled")
        if self.status not in (OrderStatus.PENDING_PAYMENT, OrderStatus.PAYMENT_FAILED):
            raise InvalidStateTransition(
                f"Cannot cancel order in {self.status.value} status"
            )
        self.status = OrderStatus.CANCELLED
        self.cancelled_at = when or datetime.now(timezone.utc)

    def expire(self) -> None:
        if self.status not in (OrderStatus.PENDING_PAYMENT, OrderStatus.PAYMENT_FAILED):
            raise InvalidStateTransition(
                f"Cannot expire order in {self.status.value} status"
            )
        self.status = OrderStatus.EXPIRED

    # --- Computed properties --------------------------------------------------

    @property
    def order_number(self) -> str | None:
        if self.id is None:
            return None
        return f"DMC-{self.created_at:%y%m%d}-{self.id:04d}"

    @property
    def grand_total(self) -> Money:
        # Placement guarantees a final summary.
        return self.summary.grand_total  # type: ignore[return-value]
