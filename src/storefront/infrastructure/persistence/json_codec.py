"""Conversions between domain values and their JSON-file representation.

Money is stored as a bare integer; the currency comes from the
repository's configuration.  Dates and datetimes use ISO 8601.
"""

from __future__ import annotations

from datetime import date

from storefront.domain.model.payment import (
    MobileMoneyPayment,
    PaymentProvider,
    PaymentSelection,
    WalletPayment,
)
from storefront.domain.model.value_objects import Money, PhoneNumber


def money_or_none(raw: int | None, currency: str) -> Money | None:
    return Money(raw, currency) if raw is not None else None


def amount_or_none(money: Money | None) -> int | None:
    return money.amount if money is not None else None


def date_or_none(raw: str | None) -> date | None:
    return date.fromisoformat(raw) if raw else None


def phone_or_none(raw: str | None) -> PhoneNumber | None:
    return PhoneNumber(raw) if raw else None


def payment_to_raw(payment: PaymentSelection | None) -> dict | None:
    match payment:
        case None:
            return None
        case MobileMoneyPayment(provider=provider, phone=phone):
            return {"provider": provider.value, "phone": phone.value}
        case WalletPayment():
            return {"provider": PaymentProvider.WALLET.value}
    raise TypeError(f"Unknown payment selection: {payment!r}")


def payment_from_raw(raw: dict | None) -> PaymentSelection | None:
    if raw is None:
        return None
    provider = PaymentProvider(raw["provider"])
    if provider is PaymentProvider.WALLET:
        return WalletPayment()
    return MobileMoneyPayment(provider=provider, phone=PhoneNumber(raw["phone"]))
