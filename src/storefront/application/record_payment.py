"""Application service: Record Payment Outcome use case.

Called when the payment provider reports back.  A successful payment
empties the client's cart and checkout for that cook; a failed one
leaves both so the client can retry with another method.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class RecordPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        session_repo: SessionRepository,
    ) -> None:
        self._order_repo = order_repo
        self._session_repo = session_repo

    def handle(self, order_id: int, succeeded: bool, session_key: str | None = None) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if succeeded:
            order.mark_paid()
        else:
            order.mark_payment_failed()
        self._order_repo.save(order)

        if succeeded and session_key is not None:
            self._session_repo.clear(session_key, order.tenant_id)

        logger.info("Payment for order %s %s", order.order_number, "succeeded" if succeeded else "failed")
        return order_to_dto(order)
