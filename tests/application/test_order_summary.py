"""Integration tests for the live order summary."""

from datetime import date

from storefront.application.show_order_summary import ShowOrderSummaryHandler
from storefront.domain.model.checkout import DeliveryLocation
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.problems import ProblemKind
from storefront.domain.model.promo import AppliedPromo, DiscountType
from storefront.domain.model.value_objects import Money
from tests.fakes import TENANT_ID, TODAY, CheckoutWorld, make_component, make_promo, make_tenant

BONAPRISO = DeliveryLocation("douala", "bonapriso", "", Money(500))


def _handler(world: CheckoutWorld) -> ShowOrderSummaryHandler:
    return ShowOrderSummaryHandler(
        world.sessions, world.tenants, world.components, world.promos, today=lambda: TODAY
    )


def _summary(world: CheckoutWorld):
    return _handler(world).handle("s1", TENANT_ID, "client-1")


class TestTotals:

    def test_delivery_without_promo(self):
        world = CheckoutWorld()
        world.fill_cart(quantity=2)
        world.edit_checkout(delivery_method=DeliveryMethod.DELIVERY, delivery_location=BONAPRISO)

        result = _summary(world)
        assert result.ok
        assert result.summary.subtotal == 5000
        assert result.summary.delivery_fee == 500
        assert result.summary.grand_total == 5500
        assert result.summary.can_proceed_to_payment

    def test_with_ten_percent_promo(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", value=10)])
        world.fill_cart(quantity=2)
        world.edit_checkout(
            delivery_method=DeliveryMethod.DELIVERY,
            delivery_location=BONAPRISO,
            applied_promo=AppliedPromo("SAVE10", Money(500)),
        )

        summary = _summary(world).summary
        assert summary.discount == 500
        assert summary.promo_code == "SAVE10"
        assert summary.grand_total == 5000

    def test_below_minimum_on_pickup(self):
        world = CheckoutWorld()
        world.fill_cart(quantity=1)
        world.edit_checkout(delivery_method=DeliveryMethod.PICKUP, pickup_location_id="kitchen")

        result = _summary(world)
        assert result.problem.kind is ProblemKind.BELOW_MINIMUM_ORDER
        assert result.problem.details["amount_needed"] == 500
        assert result.summary.delivery_fee == 0
        assert not result.summary.can_proceed_to_payment

    def test_no_delivery_choice_yet(self):
        world = CheckoutWorld()
        world.fill_cart()
        summary = _summary(world).summary
        assert summary.grand_total is None
        assert not summary.can_proceed_to_payment

    def test_empty_cart(self):
        result = _summary(CheckoutWorld())
        assert result.problem.kind is ProblemKind.CART_EMPTY


class TestLiveRecomputation:

    def test_price_change_reported_and_cart_repriced(self):
        world = CheckoutWorld()
        world.fill_cart(quantity=2)
        world.set_price("ndole", 3000)

        summary = _summary(world).summary
        assert summary.subtotal == 6000
        assert [(c.old_price, c.new_price) for c in summary.price_changes] == [(2500, 3000)]

        # The repriced cart was saved: a second look reports no change.
        assert _summary(world).summary.price_changes == []

    def test_promo_discount_follows_live_subtotal(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", value=10)])
        world.fill_cart(quantity=2)
        world.edit_checkout(applied_promo=AppliedPromo("SAVE10", Money(500)))
        world.set_price("ndole", 3000)

        assert _summary(world).summary.discount == 600

    def test_promo_that_expired_is_dropped_with_notice(self):
        world = CheckoutWorld(promos=[make_promo("SAVE10", ends_at=date(2025, 6, 14))])
        world.fill_cart(quantity=2)
        world.edit_checkout(applied_promo=AppliedPromo("SAVE10", Money(500)))

        result = _summary(world)
        assert result.summary.discount == 0
        assert [n.kind for n in result.notices] == [ProblemKind.PROMO_EXPIRED]
        assert world.sessions.get_checkout("s1", TENANT_ID).applied_promo is None

    def test_quarter_fee_change_picked_up(self):
        world = CheckoutWorld()
        world.fill_cart(quantity=2)
        stale = DeliveryLocation("douala", "akwa", "", Money(800))
        world.edit_checkout(delivery_method=DeliveryMethod.DELIVERY, delivery_location=stale)

        assert _summary(world).summary.delivery_fee == 1000

    def test_quarter_no_longer_served(self):
        world = CheckoutWorld()
        world.fill_cart(quantity=2)
        gone = DeliveryLocation("douala", "bali", "", Money(700))
        world.edit_checkout(delivery_method=DeliveryMethod.DELIVERY, delivery_location=gone)

        result = _summary(world)
        assert result.summary.grand_total is None
        assert [n.kind for n in result.notices] == [ProblemKind.QUARTER_UNAVAILABLE]


class TestTenantCurrency:

    def _euro_world(self, promos=None) -> CheckoutWorld:
        world = CheckoutWorld(
            tenant=make_tenant(minimum=10, currency="EUR"),
            components=[make_component("ndole", price=12, currency="EUR")],
            promos=promos,
        )
        world.fill_cart(quantity=2)
        return world

    def test_pickup_without_promo(self):
        world = self._euro_world()
        world.edit_checkout(delivery_method=DeliveryMethod.PICKUP, pickup_location_id="kitchen")

        result = _summary(world)
        assert result.ok
        assert result.summary.currency == "EUR"
        assert result.summary.delivery_fee == 0
        assert result.summary.discount == 0
        assert result.summary.grand_total == 24

    def test_no_delivery_choice_yet(self):
        result = _summary(self._euro_world())
        assert result.ok
        assert result.summary.subtotal == 24

    def test_fixed_promo(self):
        world = self._euro_world(
            promos=[make_promo("FIVE", discount_type=DiscountType.FIXED, value=5)]
        )
        world.edit_checkout(
            delivery_method=DeliveryMethod.PICKUP,
            pickup_location_id="kitchen",
            applied_promo=AppliedPromo("FIVE", Money(5, "EUR")),
        )

        summary = _summary(world).summary
        assert summary.discount == 5
        assert summary.grand_total == 19
