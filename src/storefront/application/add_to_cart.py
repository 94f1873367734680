"""Application service: Add to Cart use case.

Adding a component that is already in the cart increases its quantity
instead of creating a second line.  Quantities are clamped to what the
cook allows and what is in stock.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartResult, cart_to_dto
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        component_repo: MealComponentRepository,
    ) -> None:
        self._session_repo = session_repo
        self._component_repo = component_repo

    def handle(
        self,
        session_key: str,
        tenant_id: str,
        component_id: str,
        quantity: int = 1,
    ) -> CartResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)

        component = self._component_repo.get_by_id(tenant_id, component_id)
        if component is None:
            problem = Problem(ProblemKind.ITEM_UNAVAILABLE, "This item is no longer available.")
            return CartResult(cart=cart_to_dto(cart), problem=problem)

        problem = cart.add(component, quantity)
        if problem is not None:
            logger.info("Cart add refused for component %s: %s", component_id, problem.kind.value)
            return CartResult(cart=cart_to_dto(cart), problem=problem)

        self._session_repo.save_cart(cart)
        return CartResult(cart=cart_to_dto(cart))
