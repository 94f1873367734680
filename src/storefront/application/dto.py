"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any request handler) and the
application layer without exposing domain internals.  Amounts are plain
integers in the currency's smallest unit; formatting is left to the
presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.cart import Cart
from storefront.domain.model.delivery import DeliveryFeeQuote
from storefront.domain.model.order import Order
from storefront.domain.model.problems import Problem
from storefront.domain.model.summary import OrderSummary


@dataclass(frozen=True)
class CartLineDTO:
    component_id: str
    name: str
    quantity: int
    unit: str
    unit_price: int
    line_total: int
    max_quantity: int


@dataclass(frozen=True)
class MealGroupDTO:
    meal_id: str
    meal_name: str
    lines: list[CartLineDTO]
    subtotal: int


@dataclass(frozen=True)
class CartDTO:
    meals: list[MealGroupDTO]
    item_count: int
    subtotal: int
    currency: str


@dataclass(frozen=True)
class CartResult:
    """Output of a cart mutation: the cart as it now stands, plus any refusal."""

    cart: CartDTO
    problem: Problem | None = None

    @property
    def ok(self) -> bool:
        return self.problem is None


@dataclass(frozen=True)
class DeliveryFeeDTO:
    quarter_id: str
    available: bool
    fee: int | None
    is_free: bool
    quarter_name: str | None
    display_text: str


@dataclass(frozen=True)
class PriceChangeDTO:
    component_id: str
    name: str
    old_price: int
    new_price: int


@dataclass(frozen=True)
class OrderSummaryDTO:
    meals: list[MealGroupDTO]
    subtotal: int
    delivery_method: str | None
    delivery_fee: int | None
    discount: int
    promo_code: str | None
    grand_total: int | None
    item_count: int
    minimum_order_amount: int
    below_minimum: bool
    amount_needed: int
    can_proceed_to_payment: bool
    price_changes: list[PriceChangeDTO]
    currency: str


@dataclass(frozen=True)
class StepResult:
    """Output of a checkout step that only succeeds or reports a problem.

    ``alternatives`` is filled when the UI should offer a way around the
    problem (e.g. switch to pickup or contact the cook).
    """

    problem: Problem | None = None
    delivery_fee: DeliveryFeeDTO | None = None
    alternatives: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.problem is None


@dataclass(frozen=True)
class SummaryResult:
    summary: OrderSummaryDTO
    notices: list[Problem] = field(default_factory=list)
    problem: Problem | None = None

    @property
    def ok(self) -> bool:
        return self.problem is None


@dataclass(frozen=True)
class WalletOptionDTO:
    visible: bool
    enabled: bool
    balance: int
    sufficient: bool


@dataclass(frozen=True)
class PaymentOptionsDTO:
    providers: list[tuple[str, str]]  # (id, label)
    wallet: WalletOptionDTO
    grand_total: int | None


@dataclass(frozen=True)
class OrderLineItemDTO:
    meal_name: str
    name: str
    quantity: int
    unit_price: int
    line_total: int


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_number: str
    status: str
    delivery_method: str
    items: list[OrderLineItemDTO]
    subtotal: int
    delivery_fee: int
    discount: int
    promo_code: str | None
    grand_total: int
    phone: str
    payment_provider: str
    scheduled_for: str | None
    created_at: str
    currency: str


@dataclass(frozen=True)
class PlaceOrderResult:
    order: OrderDTO | None = None
    problem: Problem | None = None
    summary: OrderSummaryDTO | None = None

    @property
    def ok(self) -> bool:
        return self.problem is None


# --- Mapping ------------------------------------------------------------------


def cart_to_dto(cart: Cart) -> CartDTO:
    subtotal = cart.subtotal
    return CartDTO(
        meals=[
            MealGroupDTO(
                meal_id=group.meal_id,
                meal_name=group.meal_name,
                lines=[
                    CartLineDTO(
                        component_id=line.component_id,
                        name=line.name,
                        quantity=line.quantity.value,
                        unit=line.unit,
                        unit_price=line.unit_price.amount,
                        line_total=line.line_total.amount,
                        max_quantity=line.max_quantity,
                    )
                    for line in group.lines
                ],
                subtotal=group.subtotal.amount,
            )
            for group in cart.meal_groups
        ],
        item_count=cart.item_count,
        subtotal=subtotal.amount,
        currency=subtotal.currency,
    )


def quote_to_dto(quote: DeliveryFeeQuote) -> DeliveryFeeDTO:
    return DeliveryFeeDTO(
        quarter_id=quote.quarter_id,
        available=quote.available,
        fee=quote.fee.amount if quote.fee is not None else None,
        is_free=quote.is_free,
        quarter_name=quote.quarter_name,
        display_text=quote.display_text,
    )


def summary_to_dto(summary: OrderSummary, cart: Cart) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        meals=cart_to_dto(cart).meals,
        subtotal=summary.subtotal.amount,
        delivery_method=summary.delivery_method.value if summary.delivery_method else None,
        delivery_fee=summary.delivery_fee.amount if summary.delivery_fee is not None else None,
        discount=summary.discount.amount,
        promo_code=summary.promo_code,
        grand_total=summary.grand_total.amount if summary.grand_total is not None else None,
        item_count=summary.item_count,
        minimum_order_amount=summary.minimum_order_amount.amount,
        below_minimum=summary.below_minimum,
        amount_needed=summary.amount_needed.amount,
        can_proceed_to_payment=summary.can_proceed_to_payment,
        price_changes=[
            PriceChangeDTO(
                component_id=change.component_id,
                name=change.name,
                old_price=change.old_price.amount,
                new_price=change.new_price.amount,
            )
            for change in summary.price_changes
        ],
        currency=summary.subtotal.currency,
    )


def order_to_dto(order: Order) -> OrderDTO:
    summary = order.summary
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,  # type: ignore[arg-type]
        status=order.status.value,
        delivery_method=order.handover.method.value,
        items=[
            OrderLineItemDTO(
                meal_name=item.meal_name,
                name=item.name,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        subtotal=summary.subtotal.amount,
        delivery_fee=summary.delivery_fee.amount if summary.delivery_fee else 0,
        discount=summary.discount.amount,
        promo_code=summary.promo_code,
        grand_total=order.grand_total.amount,
        phone=str(order.phone),
        payment_provider=order.payment.provider.value,
        scheduled_for=order.scheduled_for.isoformat() if order.scheduled_for else None,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        currency=summary.subtotal.currency,
    )
