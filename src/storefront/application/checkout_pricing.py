"""Live pricing of a checkout, shared by the summary, payment and placement steps.

The server is the only place money is computed.  Every read of the
checkout re-derives the totals from live data:

1. cart lines are repriced against the catalog (differences reported)
2. the chosen quarter's fee is resolved again
3. an applied promo code is re-evaluated against the live subtotal and
   dropped when it no longer qualifies
4. ``compute_order_summary`` produces the totals

The caller decides whether to persist the refreshed cart and session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart, PriceChange
from storefront.domain.model.checkout import CheckoutSession, DeliveryLocation
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.summary import OrderSummary
from storefront.domain.model.tenant import Tenant
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.tenant_repository import TenantRepository
from storefront.domain.service.order_total_aggregator import compute_order_summary
from storefront.domain.service.promo_code_evaluator import PromoCodeEvaluator

logger = logging.getLogger(__name__)


@dataclass
class PricedCheckout:
    tenant: Tenant
    summary: OrderSummary
    price_changes: list[PriceChange] = field(default_factory=list)
    unavailable_items: list[str] = field(default_factory=list)
    notices: list[Problem] = field(default_factory=list)

    @property
    def promo_problem(self) -> Problem | None:
        for notice in self.notices:
            if notice.kind.is_promo:
                return notice
        return None


class CheckoutPricer:

    def __init__(
        self,
        tenant_repo: TenantRepository,
        component_repo: MealComponentRepository,
        promo_repo: PromoCodeRepository,
    ) -> None:
        self._tenant_repo = tenant_repo
        self._component_repo = component_repo
        self._evaluator = PromoCodeEvaluator(promo_repo)

    def price(
        self,
        cart: Cart,
        checkout: CheckoutSession,
        client_id: str,
        today: date,
    ) -> PricedCheckout:
        """Reprice ``cart`` and refresh ``checkout`` in place, then total them."""
        tenant = self._tenant_repo.get_by_id(cart.tenant_id)
        if tenant is None:
            raise EntityNotFoundError(f"Tenant '{cart.tenant_id}' not found")

        components = self._component_repo.get_many(tenant.id, cart.component_ids())
        price_changes = cart.reprice(components)
        if price_changes:
            logger.info(
                "Repriced %d cart line(s) for session %s", len(price_changes), cart.session_key
            )

        unavailable = [
            line.name
            for line in cart.lines
            if line.component_id not in components or components[line.component_id].is_sold_out
        ]

        notices: list[Problem] = []
        self._refresh_delivery_fee(tenant, checkout, notices)
        self._refresh_promo(cart, checkout, client_id, today, notices)

        summary = compute_order_summary(
            lines=cart.lines,
            delivery_method=checkout.delivery_method,
            delivery_fee=checkout.delivery_fee,
            discount=checkout.discount,
            minimum_order_amount=tenant.minimum_order_amount,
            promo_code=checkout.applied_promo.code if checkout.applied_promo else None,
            price_changes=price_changes,
        )
        return PricedCheckout(
            tenant=tenant,
            summary=summary,
            price_changes=price_changes,
            unavailable_items=unavailable,
            notices=notices,
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _refresh_delivery_fee(
        tenant: Tenant,
        checkout: CheckoutSession,
        notices: list[Problem],
    ) -> None:
        location = checkout.delivery_location
        if location is None:
            return
        quote = tenant.delivery_areas.fee_for(location.quarter_id)
        if quote.fee != location.fee:
            checkout.delivery_location = DeliveryLocation(
                town_id=location.town_id,
                quarter_id=location.quarter_id,
                neighbourhood=location.neighbourhood,
                fee=quote.fee,
            )
        if not quote.available and checkout.delivery_method is DeliveryMethod.DELIVERY:
            notices.append(
                Problem(
                    ProblemKind.QUARTER_UNAVAILABLE,
                    "The selected quarter is not in the delivery area.",
                )
            )

    def _refresh_promo(
        self,
        cart: Cart,
        checkout: CheckoutSession,
        client_id: str,
        today: date,
        notices: list[Problem],
    ) -> None:
        applied = checkout.applied_promo
        if applied is None:
            return
        evaluation = self._evaluator.evaluate(
            applied.code, cart.tenant_id, client_id, cart.subtotal, today
        )
        if evaluation.ok:
            checkout.apply_promo(evaluation.as_applied())
            return
        logger.info("Dropped promo %s from checkout: %s", applied.code, evaluation.problem.kind.value)
        checkout.remove_promo()
        notices.append(evaluation.problem)  # type: ignore[arg-type]


def below_minimum_problem(summary: OrderSummary) -> Problem:
    minimum, needed = summary.minimum_order_amount, summary.amount_needed
    return Problem(
        ProblemKind.BELOW_MINIMUM_ORDER,
        f"The minimum order for this cook is {minimum}. Add {needed} more to continue.",
        {"minimum": minimum.amount, "amount_needed": needed.amount},
    )
