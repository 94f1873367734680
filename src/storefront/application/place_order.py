"""Application service: Place Order use case.

The last gate before payment.  Nothing the client submitted is trusted:
prices, fees and the promo code are all re-derived from live data, and
the first failing check is reported.

Steps:
1. Cart not empty, every component still sold.
2. Reprice; any price difference stops the order (STALE_CART_STATE) so
   the client confirms the new totals first.
3. Delivery or pickup resolved, phone and payment chosen.
4. Promo re-evaluated; a code that expired or ran out meanwhile is
   dropped from the checkout and reported.
5. Minimum order met, total above zero, wallet covers the total.
6. Order created pending payment, promo usage recorded.

The cart is kept until the payment succeeds.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from storefront.application.checkout_pricing import CheckoutPricer, below_minimum_problem
from storefront.application.dto import PlaceOrderResult, order_to_dto, summary_to_dto
from storefront.domain.model.checkout import CheckoutSession
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.order import Handover, Order
from storefront.domain.model.payment import WalletPayment
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.tenant import Tenant
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.repository.tenant_repository import TenantRepository
from storefront.domain.repository.wallet_repository import WalletRepository

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
        component_repo: MealComponentRepository,
        promo_repo: PromoCodeRepository,
        order_repo: OrderRepository,
        wallet_repo: WalletRepository,
        wallet_enabled: bool = True,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_repo = session_repo
        self._promo_repo = promo_repo
        self._order_repo = order_repo
        self._wallet_repo = wallet_repo
        self._pricer = CheckoutPricer(tenant_repo, component_repo, promo_repo)
        self._wallet_enabled = wallet_enabled
        self._today = today

    def handle(self, session_key: str, tenant_id: str, client_id: str) -> PlaceOrderResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        if cart.is_empty:
            return self._reject(Problem(ProblemKind.CART_EMPTY, "Your cart is empty."))

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        priced = self._pricer.price(cart, checkout, client_id, self._today())
        summary = priced.summary
        summary_dto = summary_to_dto(summary, cart)
        if priced.promo_problem is not None:
            # The pricer already dropped the code from the checkout.
            self._session_repo.save_checkout(checkout)

        if priced.unavailable_items:
            names = ", ".join(priced.unavailable_items)
            return self._reject(
                Problem(
                    ProblemKind.ITEM_UNAVAILABLE,
                    f"Some items are no longer available: {names}.",
                    {"items": priced.unavailable_items},
                ),
                summary_dto,
            )

        if priced.price_changes:
            self._session_repo.save_cart(cart)
            self._session_repo.save_checkout(checkout)
            return self._reject(
                Problem(
                    ProblemKind.STALE_CART_STATE,
                    "Prices have changed since you added these items. "
                    "Please review your order.",
                    {"changed": [change.component_id for change in priced.price_changes]},
                ),
                summary_dto,
            )

        problem = self._check_selections(priced.tenant, checkout)
        if problem is None:
            problem = priced.promo_problem
        if problem is None and not summary.is_final:
            problem = Problem(
                ProblemKind.QUARTER_UNAVAILABLE,
                "The selected quarter is not in the delivery area.",
            )
        if problem is None and summary.below_minimum:
            problem = below_minimum_problem(summary)
        if problem is None and summary.grand_total.is_zero:  # type: ignore[union-attr]
            problem = Problem(
                ProblemKind.ORDER_TOTAL_ZERO,
                "Order total must be greater than zero.",
            )
        if problem is None and isinstance(checkout.payment, WalletPayment):
            problem = self._check_wallet(client_id, summary.grand_total)
        if problem is not None:
            return self._reject(problem, summary_dto)

        order = Order.place(
            tenant_id=tenant_id,
            client_id=client_id,
            lines=cart.lines,
            summary=summary,
            handover=self._handover(checkout),
            phone=checkout.phone,  # type: ignore[arg-type]
            payment=checkout.payment,  # type: ignore[arg-type]
            scheduled_for=checkout.scheduled_for,
        )
        self._order_repo.save(order)

        if checkout.applied_promo is not None:
            promo = self._promo_repo.get_by_code(tenant_id, checkout.applied_promo.code)
            if promo is not None:
                self._promo_repo.record_usage(promo, client_id, order.id)  # type: ignore[arg-type]

        logger.info(
            "Order %s placed for client %s: %s",
            order.order_number, client_id, order.grand_total,
        )
        return PlaceOrderResult(order=order_to_dto(order), summary=summary_dto)

    # --- Checks ---------------------------------------------------------------

    def _check_selections(self, tenant: Tenant, checkout: CheckoutSession) -> Problem | None:
        method = checkout.delivery_method
        if method is None:
            return Problem(
                ProblemKind.DELIVERY_NOT_SELECTED,
                "Please choose delivery or pickup.",
            )
        if not tenant.delivery_areas.offers(method):
            return Problem(
                ProblemKind.DELIVERY_METHOD_UNAVAILABLE,
                f"{method.value.capitalize()} is not available for this cook.",
            )
        if method is DeliveryMethod.DELIVERY and checkout.delivery_location is None:
            return Problem(
                ProblemKind.DELIVERY_NOT_SELECTED,
                "Please choose a delivery quarter.",
            )
        if method is DeliveryMethod.PICKUP:
            if checkout.pickup_location_id is None:
                return Problem(
                    ProblemKind.DELIVERY_NOT_SELECTED,
                    "Please choose a pickup location.",
                )
            if tenant.delivery_areas.pickup_location(checkout.pickup_location_id) is None:
                return Problem(
                    ProblemKind.PICKUP_LOCATION_UNAVAILABLE,
                    "The selected pickup location is no longer available.",
                )

        if checkout.phone is None:
            return Problem(ProblemKind.PHONE_REQUIRED, "A phone number is required.")
        if checkout.scheduled_for is not None and checkout.scheduled_for < self._today():
            return Problem(
                ProblemKind.INVALID_SCHEDULE,
                "The scheduled date cannot be in the past.",
            )
        if checkout.payment is None:
            return Problem(ProblemKind.PAYMENT_NOT_SELECTED, "Please select a payment method.")
        return None

    def _check_wallet(self, client_id: str, total) -> Problem | None:
        if not self._wallet_enabled:
            return Problem(ProblemKind.WALLET_UNAVAILABLE, "Wallet payments are not available.")
        balance = self._wallet_repo.get_balance(client_id)
        if balance < total:
            return Problem(
                ProblemKind.WALLET_INSUFFICIENT,
                f"Your wallet balance ({balance}) does not cover this order.",
                {"balance": balance.amount},
            )
        return None

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _handover(checkout: CheckoutSession) -> Handover:
        if checkout.delivery_method is DeliveryMethod.PICKUP:
            return Handover(
                method=DeliveryMethod.PICKUP,
                pickup_location_id=checkout.pickup_location_id,
            )
        location = checkout.delivery_location
        return Handover(
            method=DeliveryMethod.DELIVERY,
            town_id=location.town_id,  # type: ignore[union-attr]
            quarter_id=location.quarter_id,  # type: ignore[union-attr]
            neighbourhood=location.neighbourhood or None,  # type: ignore[union-attr]
        )

    @staticmethod
    def _reject(problem: Problem, summary=None) -> PlaceOrderResult:
        logger.info("Order rejected: %s", problem.kind.value)
        return PlaceOrderResult(problem=problem, summary=summary)
