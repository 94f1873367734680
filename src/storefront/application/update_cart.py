"""Application services: change, remove and clear cart lines."""

from __future__ import annotations

from storefront.application.dto import CartResult, cart_to_dto
from storefront.domain.repository.session_repository import SessionRepository


class UpdateCartQuantityHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(
        self,
        session_key: str,
        tenant_id: str,
        component_id: str,
        quantity: int,
    ) -> CartResult:
        """Set a line's quantity.  Zero removes the line (and its meal group
        when it was the meal's last line)."""
        cart = self._session_repo.get_cart(session_key, tenant_id)
        problem = cart.set_quantity(component_id, quantity)
        if problem is None:
            self._session_repo.save_cart(cart)
        return CartResult(cart=cart_to_dto(cart), problem=problem)


class RemoveFromCartHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, session_key: str, tenant_id: str, component_id: str) -> CartResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        cart.remove(component_id)
        self._session_repo.save_cart(cart)
        return CartResult(cart=cart_to_dto(cart))


class ClearCartHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, session_key: str, tenant_id: str) -> CartResult:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        cart.clear()
        self._session_repo.save_cart(cart)
        return CartResult(cart=cart_to_dto(cart))
