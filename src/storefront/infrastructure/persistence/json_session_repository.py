"""JSON-file-backed implementation of SessionRepository.

``sessions.json`` maps ``"<session key>:<tenant id>"`` to the cart lines
and the checkout choices of that session.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.checkout import CheckoutSession, DeliveryLocation
from storefront.domain.model.delivery import DeliveryMethod
from storefront.domain.model.promo import AppliedPromo
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from storefront.domain.repository.session_repository import SessionRepository
from storefront.infrastructure.persistence.json_codec import (
    amount_or_none,
    date_or_none,
    money_or_none,
    payment_from_raw,
    payment_to_raw,
    phone_or_none,
)


class JsonSessionRepository(SessionRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- SessionRepository interface ------------------------------------------

    def get_cart(self, session_key: str, tenant_id: str) -> Cart:
        entry = self._load_raw().get(_key(session_key, tenant_id), {})
        return Cart(
            session_key=session_key,
            tenant_id=tenant_id,
            lines=[self._line_to_domain(raw) for raw in entry.get("cart", [])],
            currency=self._currency,
        )

    def save_cart(self, cart: Cart) -> None:
        sessions = self._load_raw()
        entry = sessions.setdefault(_key(cart.session_key, cart.tenant_id), {})
        entry["cart"] = [self._line_to_raw(line) for line in cart.lines]
        self._persist_raw(sessions)

    def get_checkout(self, session_key: str, tenant_id: str) -> CheckoutSession:
        entry = self._load_raw().get(_key(session_key, tenant_id), {})
        raw = entry.get("checkout")
        if raw is None:
            return CheckoutSession(session_key=session_key, tenant_id=tenant_id)
        return self._checkout_to_domain(session_key, tenant_id, raw)

    def save_checkout(self, checkout: CheckoutSession) -> None:
        sessions = self._load_raw()
        entry = sessions.setdefault(_key(checkout.session_key, checkout.tenant_id), {})
        entry["checkout"] = self._checkout_to_raw(checkout)
        self._persist_raw(sessions)

    def clear(self, session_key: str, tenant_id: str) -> None:
        sessions = self._load_raw()
        if sessions.pop(_key(session_key, tenant_id), None) is not None:
            self._persist_raw(sessions)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _line_to_raw(line: CartLine) -> dict:
        return {
            "component_id": line.component_id,
            "meal_id": line.meal_id,
            "meal_name": line.meal_name,
            "name": line.name,
            "unit_price": line.unit_price.amount,
            "quantity": line.quantity.value,
            "unit": line.unit,
            "max_quantity": line.max_quantity,
        }

    def _line_to_domain(self, raw: dict) -> CartLine:
        return CartLine(
            component_id=raw["component_id"],
            meal_id=raw["meal_id"],
            meal_name=raw["meal_name"],
            name=raw["name"],
            unit_price=Money(raw["unit_price"], self._currency),
            quantity=Quantity(raw["quantity"]),
            unit=raw.get("unit", ""),
            max_quantity=raw.get("max_quantity", 99),
        )

    @staticmethod
    def _checkout_to_raw(checkout: CheckoutSession) -> dict:
        location = checkout.delivery_location
        promo = checkout.applied_promo
        return {
            "delivery_method": checkout.delivery_method.value if checkout.delivery_method else None,
            "delivery_location": {
                "town_id": location.town_id,
                "quarter_id": location.quarter_id,
                "neighbourhood": location.neighbourhood,
                "fee": amount_or_none(location.fee),
            } if location else None,
            "pickup_location_id": checkout.pickup_location_id,
            "phone": checkout.phone.value if checkout.phone else None,
            "scheduled_for": checkout.scheduled_for.isoformat() if checkout.scheduled_for else None,
            "promo": {"code": promo.code, "discount": promo.discount.amount} if promo else None,
            "payment": payment_to_raw(checkout.payment),
        }

    def _checkout_to_domain(self, session_key: str, tenant_id: str, raw: dict) -> CheckoutSession:
        location = raw.get("delivery_location")
        promo = raw.get("promo")
        method = raw.get("delivery_method")
        return CheckoutSession(
            session_key=session_key,
            tenant_id=tenant_id,
            delivery_method=DeliveryMethod(method) if method else None,
            delivery_location=DeliveryLocation(
                town_id=location["town_id"],
                quarter_id=location["quarter_id"],
                neighbourhood=location.get("neighbourhood", ""),
                fee=money_or_none(location.get("fee"), self._currency),
            ) if location else None,
            pickup_location_id=raw.get("pickup_location_id"),
            phone=phone_or_none(raw.get("phone")),
            scheduled_for=date_or_none(raw.get("scheduled_for")),
            applied_promo=AppliedPromo(
                code=promo["code"], discount=Money(promo["discount"], self._currency)
            ) if promo else None,
            payment=payment_from_raw(raw.get("payment")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, sessions: dict[str, dict]) -> None:
        self._file_path.write_text(
            json.dumps(sessions, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")


def _key(session_key: str, tenant_id: str) -> str:
    return f"{session_key}:{tenant_id}"
