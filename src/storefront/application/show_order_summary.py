"""Application service: Order Summary query.

Recomputes the totals from live data on every call and persists the
refreshed cart prices and promo state, so what the client sees is what
they will be charged.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from storefront.application.checkout_pricing import CheckoutPricer, below_minimum_problem
from storefront.application.dto import SummaryResult, summary_to_dto
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.repository.tenant_repository import TenantRepository


class ShowOrderSummaryHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
        component_repo: MealComponentRepository,
        promo_repo: PromoCodeRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_repo = session_repo
        self._pricer = CheckoutPricer(tenant_repo, component_repo, promo_repo)
        self._today = today

    def handle(self, session_key: str, tenant_id: str, client_id: str) -> SummaryResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        checkout = self._session_repo.get_checkout(session_key, tenant_id)

        priced = self._pricer.price(cart, checkout, client_id, self._today())
        self._session_repo.save_cart(cart)
        self._session_repo.save_checkout(checkout)

        summary = priced.summary
        problem = None
        if cart.is_empty:
            problem = Problem(ProblemKind.CART_EMPTY, "Your cart is empty.")
        elif summary.below_minimum:
            problem = below_minimum_problem(summary)

        return SummaryResult(
            summary=summary_to_dto(summary, cart),
            notices=list(priced.notices),
            problem=problem,
        )

