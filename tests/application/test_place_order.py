"""Integration tests for the PlaceOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

from datetime import date

from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.model.checkout import DeliveryLocation
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.payment import MobileMoneyPayment, PaymentProvider, WalletPayment
from storefront.domain.model.problems import ProblemKind
from storefront.domain.model.promo import AppliedPromo, DiscountType
from storefront.domain.model.value_objects import Money, PhoneNumber
from tests.fakes import (
    TENANT_ID,
    TODAY,
    CheckoutWorld,
    FakeMealComponentRepository,
    make_component,
    make_promo,
    make_tenant,
)

PHONE = PhoneNumber.parse("670000000")
BONAPRISO = DeliveryLocation("douala", "bonapriso", "near the pharmacy", Money(500))


def _ready(world: CheckoutWorld, quantity: int = 2, **overrides) -> None:
    """A cart of ndole and a complete checkout: delivery, phone, MoMo."""
    world.fill_cart(quantity=quantity)
    checkout = dict(
        delivery_method=DeliveryMethod.DELIVERY,
        delivery_location=BONAPRISO,
        phone=PHONE,
        payment=MobileMoneyPayment(PaymentProvider.MTN_MOMO, PHONE),
    )
    checkout.update(overrides)
    world.edit_checkout(**checkout)


def _place(world: CheckoutWorld, wallet_enabled: bool = True, today: date = TODAY):
    handler = PlaceOrderHandler(
        world.sessions, world.tenants, world.components, world.promos,
        world.orders, world.wallets, wallet_enabled=wallet_enabled, today=lambda: today,
    )
    return handler.handle("s1", TENANT_ID, "client-1")


class TestPlaceOrderHappyPath:

    def test_creates_pending_order_with_frozen_totals(self):
        world = CheckoutWorld()
        _ready(world)

        result = _place(world)

        assert result.ok
        assert result.order.status == "pending_payment"
        assert result.order.subtotal == 5000
        assert result.order.delivery_fee == 500
        assert result.order.grand_total == 5500
        assert result.order.order_number.startswith("DMC-")
        assert result.order.order_number.endswith("-0001")

    def test_persists_order_with_handover(self):
        world = CheckoutWorld()
        _ready(world)
        result = _place(world)

        saved = world.orders.get_by_id(result.order.id)
        assert saved.status is OrderStatus.PENDING_PAYMENT
        assert saved.handover.quarter_id == "bonapriso"
        assert saved.handover.neighbourhood == "near the pharmacy"
        assert saved.phone == PHONE

    def test_cart_kept_until_payment(self):
        world = CheckoutWorld()
        _ready(world)
        _place(world)
        assert not world.sessions.get_cart("s1", TENANT_ID).is_empty

    def test_pickup_order_has_no_fee(self):
        world = CheckoutWorld()
        _ready(world, delivery_method=DeliveryMethod.PICKUP, pickup_location_id="kitchen")
        result = _place(world)
        assert result.order.delivery_method == "pickup"
        assert result.order.delivery_fee == 0
        assert result.order.grand_total == 5000

    def test_promo_usage_recorded_on_placement(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", value=10)])
        _ready(world, applied_promo=AppliedPromo("SAVE10", Money(500)))

        result = _place(world)

        assert result.order.discount == 500
        assert result.order.grand_total == 5000
        assert world.promos.get_by_code(TENANT_ID, "SAVE10").times_used == 1
        assert world.promos.count_client_usages(TENANT_ID, "SAVE10", "client-1") == 1

    def test_wallet_payment_with_enough_balance(self):
        world = CheckoutWorld(balances={"client-1": 10_000})
        _ready(world, payment=WalletPayment())
        result = _place(world)
        assert result.ok
        assert result.order.payment_provider == "wallet"


class TestPlaceOrderRevalidation:

    def test_empty_cart(self):
        result = _place(CheckoutWorld())
        assert result.problem.kind is ProblemKind.CART_EMPTY

    def test_component_sold_out_since_added(self):
        world = CheckoutWorld()
        _ready(world)
        world.components.save(make_component("ndole", price=2500, available=False))

        result = _place(world)
        assert result.problem.kind is ProblemKind.ITEM_UNAVAILABLE
        assert world.orders.all() == []

    def test_component_removed_from_catalog(self):
        world = CheckoutWorld(components=[make_component("ndole"), make_component("eru")])
        _ready(world)
        world.fill_cart("eru", 1)
        world.components = FakeMealComponentRepository([make_component("ndole")])

        result = _place(world)
        assert result.problem.kind is ProblemKind.ITEM_UNAVAILABLE
        assert result.problem.details["items"] == ["Eru"]

    def test_price_change_is_stale_cart(self):
        world = CheckoutWorld()
        _ready(world)
        world.set_price("ndole", 3000)

        result = _place(world)

        assert result.problem.kind is ProblemKind.STALE_CART_STATE
        assert result.summary.grand_total == 6500
        assert world.orders.all() == []
        # Confirming the new totals lets the order through.
        assert _place(world).ok

    def test_no_delivery_choice(self):
        world = CheckoutWorld()
        _ready(world, delivery_method=None, delivery_location=None)
        assert _place(world).problem.kind is ProblemKind.DELIVERY_NOT_SELECTED

    def test_pickup_without_location(self):
        world = CheckoutWorld()
        _ready(world, delivery_method=DeliveryMethod.PICKUP)
        assert _place(world).problem.kind is ProblemKind.DELIVERY_NOT_SELECTED

    def test_quarter_dropped_from_delivery_areas(self):
        world = CheckoutWorld()
        _ready(world, delivery_location=DeliveryLocation("douala", "bali", "", Money(700)))
        assert _place(world).problem.kind is ProblemKind.QUARTER_UNAVAILABLE

    def test_missing_phone(self):
        world = CheckoutWorld()
        _ready(world, phone=None)
        assert _place(world).problem.kind is ProblemKind.PHONE_REQUIRED

    def test_missing_payment(self):
        world = CheckoutWorld()
        _ready(world, payment=None)
        assert _place(world).problem.kind is ProblemKind.PAYMENT_NOT_SELECTED

    def test_schedule_in_the_past(self):
        world = CheckoutWorld()
        _ready(world, scheduled_for=date(2025, 6, 10))
        assert _place(world).problem.kind is ProblemKind.INVALID_SCHEDULE

    def test_below_minimum(self):
        world = CheckoutWorld()
        _ready(world, quantity=1)
        result = _place(world)
        assert result.problem.kind is ProblemKind.BELOW_MINIMUM_ORDER
        assert result.problem.details["amount_needed"] == 500

    def test_promo_pushing_subtotal_below_minimum(self):
        world = CheckoutWorld(promos=[make_promo("HALF", value=50)])
        _ready(world, applied_promo=AppliedPromo("HALF", Money(2500)))
        result = _place(world)
        assert result.problem.kind is ProblemKind.BELOW_MINIMUM_ORDER
        assert result.summary.grand_total == 3000

    def test_promo_expired_before_submission(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", ends_at=TODAY)])
        _ready(world, applied_promo=AppliedPromo("SAVE10", Money(500)))

        result = _place(world, today=date(2025, 6, 16))

        assert result.problem.kind is ProblemKind.PROMO_EXPIRED
        assert "expired" in result.problem.message
        assert world.sessions.get_checkout("s1", TENANT_ID).applied_promo is None
        assert world.promos.get_by_code(TENANT_ID, "SAVE10").times_used == 0
        assert world.orders.all() == []

    def test_promo_exhausted_before_submission(self):
        promo = make_promo("SAVE10", max_uses=1)
        world = CheckoutWorld(promos=[promo])
        _ready(world, applied_promo=AppliedPromo("SAVE10", Money(500)))
        promo.record_use()

        assert _place(world).problem.kind is ProblemKind.PROMO_USAGE_EXHAUSTED

    def test_wallet_insufficient(self):
        world = CheckoutWorld(balances={"client-1": 1000})
        _ready(world, payment=WalletPayment())
        result = _place(world)
        assert result.problem.kind is ProblemKind.WALLET_INSUFFICIENT
        assert result.problem.details["balance"] == 1000

    def test_wallet_disabled_by_platform(self):
        world = CheckoutWorld(balances={"client-1": 10_000})
        _ready(world, payment=WalletPayment())
        assert _place(world, wallet_enabled=False).problem.kind is ProblemKind.WALLET_UNAVAILABLE

    def test_zero_total_refused(self):
        world = CheckoutWorld(
            tenant=make_tenant(minimum=0),
            promos=[make_promo("BIGDEAL", discount_type=DiscountType.FIXED, value=100_000)],
        )
        _ready(
            world,
            delivery_method=DeliveryMethod.PICKUP,
            pickup_location_id="kitchen",
            applied_promo=AppliedPromo("BIGDEAL", Money(5000)),
        )

        result = _place(world)

        assert result.problem.kind is ProblemKind.ORDER_TOTAL_ZERO
        assert result.summary.grand_total == 0
        assert world.orders.all() == []
        assert world.promos.get_by_code(TENANT_ID, "BIGDEAL").times_used == 0

    def test_dropped_promo_saved_even_when_another_step_is_missing(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", ends_at=TODAY)])
        _ready(world, phone=None, applied_promo=AppliedPromo("SAVE10", Money(500)))

        result = _place(world, today=date(2025, 6, 16))

        assert result.problem.kind is ProblemKind.PHONE_REQUIRED
        assert world.sessions.get_checkout("s1", TENANT_ID).applied_promo is None


class TestPlaceOrderInOtherCurrency:

    def _euro_world(self, promos=None) -> CheckoutWorld:
        return CheckoutWorld(
            tenant=make_tenant(minimum=10, currency="EUR"),
            components=[make_component("ndole", price=12, currency="EUR")],
            promos=promos,
        )

    def test_pickup_order_without_promo(self):
        world = self._euro_world()
        _ready(world, delivery_method=DeliveryMethod.PICKUP,
               delivery_location=None, pickup_location_id="kitchen")

        result = _place(world)

        assert result.ok
        assert result.order.currency == "EUR"
        assert result.order.grand_total == 24

    def test_fixed_promo(self):
        world = self._euro_world(
            promos=[make_promo("FIVE", discount_type=DiscountType.FIXED, value=5)]
        )
        _ready(world, delivery_method=DeliveryMethod.PICKUP, delivery_location=None,
               pickup_location_id="kitchen", applied_promo=AppliedPromo("FIVE", Money(5, "EUR")))

        result = _place(world)

        assert result.order.discount == 5
        assert result.order.grand_total == 19
