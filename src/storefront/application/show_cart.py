"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.repository.session_repository import SessionRepository


class ShowCartHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, session_key: str, tenant_id: str) -> CartDTO:
        return cart_to_dto(self._session_repo.get_cart(session_key, tenant_id))
