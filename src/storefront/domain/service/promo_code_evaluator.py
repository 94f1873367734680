"""Domain service: Promo Code Evaluation.

Validates a code against a food subtotal and prices the discount.  The
checks run in a fixed order and the first failure wins, so a client
always sees the most fundamental reason a code does not work:

  1. the code exists for this tenant
  2. the code is active
  3. the start date has been reached
  4. the end date has not passed (inclusive)
  5. the total usage limit is not exhausted
  6. the client's personal usage limit is not exhausted
  7. the food subtotal meets the code's minimum order

The same evaluation runs when the code is applied and again when the
order is placed, since a code can expire or run out in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.promo import AppliedPromo, PromoCode, PromoStatus, normalize_code
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.promo_code_repository import PromoCodeRepository


@dataclass(frozen=True)
class PromoEvaluation:
    """Result of evaluating a code: either a priced discount or a problem."""

    code: str
    promo: PromoCode | None = None
    discount: Money | None = None
    problem: Problem | None = None

    @property
    def ok(self) -> bool:
        return self.problem is None

    def as_applied(self) -> AppliedPromo:
        if self.problem is not None or self.discount is None:
            raise ValueError("Only a successful evaluation can be applied")
        return AppliedPromo(code=self.code, discount=self.discount)


class PromoCodeEvaluator:

    def __init__(self, promo_repo: PromoCodeRepository) -> None:
        self._promo_repo = promo_repo

    def evaluate(
        self,
        raw_code: str,
        tenant_id: str,
        client_id: str,
        food_subtotal: Money,
        today: date,
    ) -> PromoEvaluation:
        code = normalize_code(raw_code)
        promo = self._promo_repo.get_by_code(tenant_id, code) if code else None

        # Unknown and cross-tenant codes share one generic message.
        if promo is None:
            return self._reject(code, None, ProblemKind.PROMO_NOT_FOUND,
                                "This promo code is not valid.")

        if promo.status is not PromoStatus.ACTIVE:
            return self._reject(code, promo, ProblemKind.PROMO_INACTIVE,
                                "This promo code is currently inactive.")

        if today < promo.starts_at:
            return self._reject(
                code, promo, ProblemKind.PROMO_NOT_STARTED,
                f"This promo code is not yet active. It starts on {promo.starts_at:%Y-%m-%d}.",
                starts_at=promo.starts_at.isoformat(),
            )

        if promo.ends_at is not None and today > promo.ends_at:
            return self._reject(code, promo, ProblemKind.PROMO_EXPIRED,
                                "This promo code has expired.")

        if promo.is_exhausted:
            return self._reject(code, promo, ProblemKind.PROMO_USAGE_EXHAUSTED,
                                "This promo code has been fully redeemed.")

        if promo.max_uses_per_client > 0:
            used = self._promo_repo.count_client_usages(tenant_id, code, client_id)
            if used >= promo.max_uses_per_client:
                return self._reject(
                    code, promo, ProblemKind.PROMO_CLIENT_LIMIT_REACHED,
                    "You have already used this promo code the maximum number of times.",
                )

        minimum = promo.minimum_order_amount
        if not minimum.is_zero and food_subtotal < minimum:
            needed = minimum - food_subtotal
            return self._reject(
                code, promo, ProblemKind.PROMO_MINIMUM_NOT_MET,
                f"This promo code requires a minimum order of {minimum}. "
                f"Add {needed} more to use it.",
                minimum=minimum.amount,
                amount_needed=needed.amount,
            )

        return PromoEvaluation(code=code, promo=promo, discount=promo.discount_for(food_subtotal))

    @staticmethod
    def _reject(
        code: str,
        promo: PromoCode | None,
        kind: ProblemKind,
        message: str,
        **details,
    ) -> PromoEvaluation:
        return PromoEvaluation(code=code, promo=promo, problem=Problem(kind, message, details))
