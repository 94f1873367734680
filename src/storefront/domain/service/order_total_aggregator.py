"""Domain service: Order Total Aggregation.

A pure function from cart lines, delivery choice and discount to an
``OrderSummary``.  It holds no state, so the checkout can call it after
every change (quantity edit, quarter switch, promo apply/remove) and get
the same answer for the same inputs.

Rules:
- subtotal is the sum of ``unit_price * quantity`` over all lines
- pickup always costs 0; delivery costs the resolved quarter fee, and an
  unresolved fee (None) leaves the grand total open
- the discount applies to food only and is capped at the subtotal
- the minimum order is checked against the post-discount food subtotal,
  without the delivery fee
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from storefront.domain.model.cart import CartLine, PriceChange
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.summary import OrderSummary
from storefront.domain.model.value_objects import Money


def compute_order_summary(
    lines: Sequence[CartLine],
    delivery_method: DeliveryMethod | None,
    delivery_fee: Money | None,
    discount: Money | None,
    minimum_order_amount: Money,
    promo_code: str | None = None,
    price_changes: Iterable[PriceChange] = (),
) -> OrderSummary:
    currency = minimum_order_amount.currency
    subtotal = Money.zero(currency)
    item_count = 0
    for line in lines:
        subtotal = subtotal + line.line_total
        item_count += line.quantity.value

    if delivery_method is DeliveryMethod.PICKUP:
        fee: Money | None = Money.zero(currency)
    elif delivery_method is DeliveryMethod.DELIVERY:
        fee = delivery_fee
    else:
        fee = None

    effective_discount = (discount or Money.zero(currency)).min(subtotal)
    food_total = subtotal - effective_discount

    below_minimum = food_total < minimum_order_amount
    amount_needed = (
        minimum_order_amount - food_total if below_minimum else Money.zero(currency)
    )

    return OrderSummary(
        subtotal=subtotal,
        delivery_fee=fee,
        discount=effective_discount,
        grand_total=food_total + fee if fee is not None else None,
        minimum_order_amount=minimum_order_amount,
        below_minimum=below_minimum,
        amount_needed=amount_needed,
        item_count=item_count,
        delivery_method=delivery_method,
        promo_code=promo_code,
        price_changes=tuple(price_changes),
    )
