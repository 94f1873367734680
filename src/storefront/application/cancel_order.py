"""Application services: Cancel Order and Expire Order use cases.

Only unpaid orders (pending or failed payment) can be cancelled or
expired.  Promo usage recorded at placement is not given back.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


def _load(order_repo: OrderRepository, order_id: int) -> Order:
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{order_id} not found")
    return order


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = _load(self._order_repo, order_id)
        order.cancel()
        self._order_repo.save(order)
        logger.info("Order %s cancelled", order.order_number)


class ExpireOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = _load(self._order_repo, order_id)
        order.expire()
        self._order_repo.save(order)
        logger.info("Order %s expired", order.order_number)
