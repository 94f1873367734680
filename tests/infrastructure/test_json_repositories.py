"""The JSON repositories against real files in a temporary directory."""

from datetime import date

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.model.checkout import CheckoutSession, DeliveryLocation
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.payment import MobileMoneyPayment, PaymentProvider, WalletPayment
from storefront.domain.model.promo import AppliedPromo
from storefront.domain.model.value_objects import Money, PhoneNumber
from storefront.domain.service.delivery_fee_resolver import DeliveryFeeResolver
from storefront.infrastructure import bootstrap

PHONE = PhoneNumber.parse("670000000")


class TestReadOnlyRepositories:

    def test_tenant_delivery_configuration(self, data_dir):
        tenant = bootstrap.tenant_repository(data_dir).get_by_id("mama-ndole")
        assert tenant.minimum_order_amount == Money(3000)
        assert not tenant.delivery_areas.quarter("bali").available
        assert bootstrap.tenant_repository(data_dir).get_by_id("nobody") is None

    def test_group_fee_resolved_from_file(self, data_dir):
        resolver = DeliveryFeeResolver(bootstrap.tenant_repository(data_dir))
        assert resolver.resolve("mama-ndole", "bonapriso").fee == Money(500)
        assert resolver.resolve("mama-ndole", "akwa").fee == Money(1000)

    def test_components_scoped_to_tenant(self, data_dir):
        repo = bootstrap.component_repository(data_dir)
        assert repo.get_by_id("mama-ndole", "plantain").unit == "portion"
        assert repo.get_by_id("mama-ndole", "eru") is None
        assert set(repo.get_many("mama-ndole", ["ndole", "eru"])) == {"ndole"}

    def test_unknown_wallet_is_empty(self, data_dir):
        repo = bootstrap.wallet_repository(data_dir)
        assert repo.get_balance("rich") == Money(50_000)
        assert repo.get_balance("someone") == Money(0)

    def test_missing_files_are_created(self, tmp_path):
        assert bootstrap.tenant_repository(tmp_path / "fresh").get_by_id("x") is None
        assert (tmp_path / "fresh" / "tenants.json").exists()


class TestSessionRepository:

    def test_checkout_round_trip(self, data_dir):
        checkout = CheckoutSession(
            session_key="s1",
            tenant_id="mama-ndole",
            delivery_method=DeliveryMethod.DELIVERY,
            delivery_location=DeliveryLocation("douala", "akwa", "behind the market", Money(1000)),
            phone=PHONE,
            scheduled_for=date(2030, 1, 5),
            applied_promo=AppliedPromo("SAVE10", Money(500)),
            payment=MobileMoneyPayment(PaymentProvider.ORANGE_MONEY, PHONE),
        )
        bootstrap.session_repository(data_dir).save_checkout(checkout)

        assert bootstrap.session_repository(data_dir).get_checkout("s1", "mama-ndole") == checkout

    def test_wallet_payment_round_trip(self, data_dir):
        checkout = CheckoutSession("s1", "mama-ndole", payment=WalletPayment())
        bootstrap.session_repository(data_dir).save_checkout(checkout)
        loaded = bootstrap.session_repository(data_dir).get_checkout("s1", "mama-ndole")
        assert loaded.payment == WalletPayment()

    def test_cart_kept_per_tenant(self, data_dir):
        handler = AddToCartHandler(
            bootstrap.session_repository(data_dir), bootstrap.component_repository(data_dir)
        )
        handler.handle("s1", "mama-ndole", "ndole", 2)

        repo = bootstrap.session_repository(data_dir)
        assert repo.get_cart("s1", "mama-ndole").subtotal == Money(5000)
        assert repo.get_cart("s1", "other-cook").is_empty

    def test_clear(self, data_dir):
        repo = bootstrap.session_repository(data_dir)
        repo.save_checkout(CheckoutSession("s1", "mama-ndole", phone=PHONE))
        repo.clear("s1", "mama-ndole")
        assert repo.get_checkout("s1", "mama-ndole").phone is None


class TestPromoCodeRepository:

    def test_lookup_is_case_insensitive(self, data_dir):
        promo = bootstrap.promo_code_repository(data_dir).get_by_code("mama-ndole", " save10 ")
        assert promo.code == "SAVE10"
        assert promo.max_uses == 5

    def test_usage_recorded(self, data_dir):
        repo = bootstrap.promo_code_repository(data_dir)
        repo.record_usage(repo.get_by_code("mama-ndole", "SAVE10"), "client-1", 1)

        fresh = bootstrap.promo_code_repository(data_dir)
        assert fresh.get_by_code("mama-ndole", "SAVE10").times_used == 1
        assert fresh.count_client_usages("mama-ndole", "SAVE10", "client-1") == 1
        assert fresh.count_client_usages("mama-ndole", "SAVE10", "client-2") == 0


class TestOrderRepository:

    def _place(self, data_dir):
        sessions = bootstrap.session_repository(data_dir)
        AddToCartHandler(sessions, bootstrap.component_repository(data_dir)).handle(
            "s1", "mama-ndole", "ndole", 2
        )
        sessions.save_checkout(
            CheckoutSession(
                "s1",
                "mama-ndole",
                delivery_method=DeliveryMethod.DELIVERY,
                delivery_location=DeliveryLocation("douala", "bonapriso", "", Money(500)),
                phone=PHONE,
                applied_promo=AppliedPromo("SAVE10", Money(500)),
                payment=MobileMoneyPayment(PaymentProvider.MTN_MOMO, PHONE),
            )
        )
        handler = PlaceOrderHandler(
            sessions,
            bootstrap.tenant_repository(data_dir),
            bootstrap.component_repository(data_dir),
            bootstrap.promo_code_repository(data_dir),
            bootstrap.order_repository(data_dir),
            bootstrap.wallet_repository(data_dir),
        )
        return handler.handle("s1", "mama-ndole", "client-1")

    def test_placed_order_reloads_with_frozen_totals(self, data_dir):
        result = self._place(data_dir)
        assert result.ok

        order = bootstrap.order_repository(data_dir).get_by_id(result.order.id)
        assert order.status is OrderStatus.PENDING_PAYMENT
        assert order.summary.subtotal == Money(5000)
        assert order.summary.delivery_fee == Money(500)
        assert order.summary.discount == Money(500)
        assert order.summary.promo_code == "SAVE10"
        assert order.grand_total == Money(5000)
        assert order.handover.quarter_id == "bonapriso"
        assert order.payment == MobileMoneyPayment(PaymentProvider.MTN_MOMO, PHONE)
        assert [item.name for item in order.items] == ["Ndole"]

    def test_status_change_is_persisted(self, data_dir):
        order_id = self._place(data_dir).order.id
        repo = bootstrap.order_repository(data_dir)
        order = repo.get_by_id(order_id)
        order.mark_paid()
        repo.save(order)

        assert bootstrap.order_repository(data_dir).get_by_id(order_id).status is OrderStatus.PAID
        assert repo.next_id() == order_id + 1

    def test_promo_usage_written_at_placement(self, data_dir):
        self._place(data_dir)
        promos = bootstrap.promo_code_repository(data_dir)
        assert promos.get_by_code("mama-ndole", "SAVE10").times_used == 1
