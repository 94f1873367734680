"""Payment selection: a closed set of providers.

``PaymentSelection`` is a tagged union.  Code that branches on it should
use ``match`` over the two variants so a new provider cannot slip through
unhandled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, PhoneNumber


class PaymentProvider(Enum):
    MTN_MOMO = "mtn_momo"
    ORANGE_MONEY = "orange_money"
    WALLET = "wallet"

    @property
    def label(self) -> str:
        return _PROVIDER_LABELS[self]

    @property
    def is_mobile_money(self) -> bool:
        return self is not PaymentProvider.WALLET


_PROVIDER_LABELS = {
    PaymentProvider.MTN_MOMO: "MTN Mobile Money",
    PaymentProvider.ORANGE_MONEY: "Orange Money",
    PaymentProvider.WALLET: "Wallet Balance",
}


@dataclass(frozen=True)
class MobileMoneyPayment:
    provider: PaymentProvider
    phone: PhoneNumber

    def __post_init__(self) -> None:
        if not self.provider.is_mobile_money:
            raise ValidationError(f"{self.provider.label} is not a mobile money provider")


@dataclass(frozen=True)
class WalletPayment:
    provider: PaymentProvider = PaymentProvider.WALLET


PaymentSelection = Union[MobileMoneyPayment, WalletPayment]


@dataclass(frozen=True)
class WalletOption:
    """How the wallet appears on the payment step.

    Hidden entirely when the platform disabled wallet payments; shown but
    not selectable when the balance does not cover the order.
    """

    visible: bool
    balance: Money
    sufficient: bool

    @property
    def enabled(self) -> bool:
        return self.visible and self.sufficient

    @staticmethod
    def for_order(wallet_enabled: bool, balance: Money, order_total: Money) -> WalletOption:
        if not wallet_enabled:
            return WalletOption(visible=False, balance=Money.zero(balance.currency), sufficient=False)
        return WalletOption(visible=True, balance=balance, sufficient=balance >= order_total)
