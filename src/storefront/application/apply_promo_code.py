"""Application services: apply and remove a promo code.

Only one code can be attached to a checkout.  The code is checked against
the cart repriced to live catalog prices.  Applying a second valid
code replaces the first; a rejected code leaves the current one in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.service.promo_code_evaluator import PromoCodeEvaluator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromoResult:
    code: str
    discount: int = 0
    replaced: str | None = None
    problem: Problem | None = None

    @property
    def ok(self) -> bool:
        return self.problem is None


class ApplyPromoCodeHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        promo_repo: PromoCodeRepository,
        component_repo: MealComponentRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_repo = session_repo
        self._component_repo = component_repo
        self._evaluator = PromoCodeEvaluator(promo_repo)
        self._today = today

    def handle(
        self,
        session_key: str,
        tenant_id: str,
        client_id: str,
        raw_code: str,
    ) -> PromoResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        if cart.is_empty:
            return PromoResult(
                code=raw_code,
                problem=Problem(ProblemKind.CART_EMPTY, "Your cart is empty."),
            )

        # Not saved: the summary reports the price changes.
        cart.reprice(self._component_repo.get_many(tenant_id, cart.component_ids()))

        evaluation = self._evaluator.evaluate(
            raw_code, tenant_id, client_id, cart.subtotal, self._today()
        )
        if not evaluation.ok:
            logger.info(
                "Promo %s rejected for client %s: %s",
                evaluation.code, client_id, evaluation.problem.kind.value,  # type: ignore[union-attr]
            )
            return PromoResult(code=evaluation.code, problem=evaluation.problem)

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        previous = checkout.applied_promo
        applied = evaluation.as_applied()
        checkout.apply_promo(applied)
        self._session_repo.save_checkout(checkout)

        logger.info("Promo %s applied for client %s (discount %s)", applied.code, client_id, applied.discount)
        return PromoResult(
            code=applied.code,
            discount=applied.discount.amount,
            replaced=previous.code if previous and previous.code != applied.code else None,
        )


class RemovePromoCodeHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, session_key: str, tenant_id: str) -> None:
        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.remove_promo()
        self._session_repo.save_checkout(checkout)
