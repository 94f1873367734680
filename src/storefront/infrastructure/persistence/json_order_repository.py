"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.order import Handover, Order, OrderLineItem, OrderStatus
from storefront.domain.model.summary import OrderSummary
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, PhoneNumber, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_codec import (
    amount_or_none,
    date_or_none,
    money_or_none,
    payment_from_raw,
    payment_to_raw,
)

logger = logging.getLogger(__name__)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = self.next_id()
            logger.debug("Assigned id %d to new order", order.id)

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        summary = order.summary
        handover = order.handover
        return {
            "id": order.id,
            "order_number": order.order_number,
            "tenant_id": order.tenant_id,
            "client_id": order.client_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "cancelled_at": order.cancelled_at.isoformat() if order.cancelled_at else None,
            "scheduled_for": order.scheduled_for.isoformat() if order.scheduled_for else None,
            "phone": order.phone.value,
            "payment": payment_to_raw(order.payment),
            "handover": {
                "method": handover.method.value,
                "town_id": handover.town_id,
                "quarter_id": handover.quarter_id,
                "neighbourhood": handover.neighbourhood,
                "pickup_location_id": handover.pickup_location_id,
            },
            "items": [
                {
                    "component_id": item.component_id,
                    "meal_name": item.meal_name,
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.amount,
                }
                for item in order.items
            ],
            "summary": {
                "subtotal": summary.subtotal.amount,
                "delivery_fee": amount_or_none(summary.delivery_fee),
                "discount": summary.discount.amount,
                "grand_total": amount_or_none(summary.grand_total),
                "minimum_order_amount": summary.minimum_order_amount.amount,
                "item_count": summary.item_count,
                "promo_code": summary.promo_code,
            },
        }

    def _to_domain(self, raw: dict) -> Order:
        money = self._money
        items = [
            OrderLineItem(
                component_id=i["component_id"],
                meal_name=i["meal_name"],
                name=i["name"],
                quantity=Quantity(i["quantity"]),
                unit_price=money(i["unit_price"]),
            )
            for i in raw["items"]
        ]
        handover = raw["handover"]
        method = DeliveryMethod(handover["method"])
        s = raw["summary"]
        summary = OrderSummary(
            subtotal=money(s["subtotal"]),
            delivery_fee=money_or_none(s["delivery_fee"], self._currency),
            discount=money(s["discount"]),
            grand_total=money_or_none(s["grand_total"], self._currency),
            minimum_order_amount=money(s["minimum_order_amount"]),
            # Placed orders always met the minimum.
            below_minimum=False,
            amount_needed=Money.zero(self._currency),
            item_count=s["item_count"],
            delivery_method=method,
            promo_code=s.get("promo_code"),
        )
        return Order(
            id=raw["id"],
            tenant_id=raw["tenant_id"],
            client_id=raw["client_id"],
            items=items,
            summary=summary,
            handover=Handover(
                method=method,
                town_id=handover.get("town_id"),
                quarter_id=handover.get("quarter_id"),
                neighbourhood=handover.get("neighbourhood"),
                pickup_location_id=handover.get("pickup_location_id"),
            ),
            phone=PhoneNumber(raw["phone"]),
            payment=payment_from_raw(raw["payment"]),  # type: ignore[arg-type]
            scheduled_for=date_or_none(raw.get("scheduled_for")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            paid_at=_datetime_or_none(raw.get("paid_at")),
            cancelled_at=_datetime_or_none(raw.get("cancelled_at")),
        )

    def _money(self, amount: int) -> Money:
        return Money(amount, self._currency)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _datetime_or_none(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None
