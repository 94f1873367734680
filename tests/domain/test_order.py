"""Unit tests for the Order aggregate and its payment lifecycle."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import InvalidStateTransition, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.order import Handover, Order, OrderStatus
from storefront.domain.model.payment import MobileMoneyPayment, PaymentProvider
from storefront.domain.model.value_objects import Money, PhoneNumber, Quantity
from storefront.domain.service.order_total_aggregator import compute_order_summary

PHONE = PhoneNumber.parse("670000000")


def _line(price: int = 2500, qty: int = 2) -> CartLine:
    return CartLine(
        component_id="ndole",
        meal_id="m1",
        meal_name="Ndole Special",
        name="Ndole",
        unit_price=Money(price),
        quantity=Quantity(qty),
    )


def _place(lines=None, fee: Money | None = Money(500), minimum: int = 0) -> Order:
    lines = lines if lines is not None else [_line()]
    summary = compute_order_summary(
        lines=lines,
        delivery_method=DeliveryMethod.DELIVERY,
        delivery_fee=fee,
        discount=None,
        minimum_order_amount=Money(minimum),
    )
    return Order.place(
        tenant_id="mama-ndole",
        client_id="client-1",
        lines=lines,
        summary=summary,
        handover=Handover(DeliveryMethod.DELIVERY, town_id="douala", quarter_id="akwa"),
        phone=PHONE,
        payment=MobileMoneyPayment(PaymentProvider.MTN_MOMO, PHONE),
    )


class TestPlacement:

    def test_new_order_pending_payment(self):
        order = _place()
        assert order.status is OrderStatus.PENDING_PAYMENT
        assert order.id is None  # assigned by repository
        assert order.grand_total == Money(5500)

    def test_lines_snapshot_prices(self):
        line = _line(price=2500)
        order = _place(lines=[line])
        line.unit_price = Money(9999)
        assert order.items[0].unit_price == Money(2500)

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _place(lines=[])

    def test_unresolved_fee_rejected(self):
        with pytest.raises(ValidationError, match="not final"):
            _place(fee=None)

    def test_below_minimum_rejected(self):
        with pytest.raises(ValidationError, match="below minimum"):
            _place(minimum=10_000)

    def test_order_number_format(self):
        order = _place()
        order.id = 42
        order.created_at = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
        assert order.order_number == "DMC-250615-0042"


class TestLifecycle:

    def test_pay(self):
        order = _place()
        order.mark_paid()
        assert order.status is OrderStatus.PAID
        assert order.paid_at is not None

    def test_failed_payment_can_be_retried(self):
        order = _place()
        order.mark_payment_failed()
        assert order.status is OrderStatus.PAYMENT_FAILED
        order.mark_paid()
        assert order.status is OrderStatus.PAID

    def test_cannot_pay_twice(self):
        order = _place()
        order.mark_paid()
        with pytest.raises(InvalidStateTransition):
            order.mark_paid()

    def test_cancel_pending(self):
        order = _place()
        order.cancel()
        assert order.status is OrderStatus.CANCELLED
        assert order.cancelled_at is not None

    def test_cannot_cancel_paid(self):
        order = _place()
        order.mark_paid()
        with pytest.raises(InvalidStateTransition, match="paid"):
            order.cancel()

    def test_cannot_cancel_twice(self):
        order = _place()
        order.cancel()
        with pytest.raises(InvalidStateTransition, match="already cancelled"):
            order.cancel()

    def test_expire_unpaid(self):
        order = _place()
        order.expire()
        assert order.status is OrderStatus.EXPIRED

    def test_cannot_expire_paid(self):
        order = _place()
        order.mark_paid()
        with pytest.raises(InvalidStateTransition):
            order.expire()
