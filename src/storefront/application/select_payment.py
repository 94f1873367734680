"""Application services: payment step.

Mobile money needs a phone to push the payment request to; it defaults
to the checkout's contact phone.  The wallet is offered only when the
platform enables it and can only be chosen when it covers the total.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from storefront.application.checkout_pricing import CheckoutPricer
from storefront.application.dto import PaymentOptionsDTO, StepResult, WalletOptionDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import CheckoutSession
from storefront.domain.model.payment import (
    MobileMoneyPayment,
    PaymentProvider,
    WalletOption,
    WalletPayment,
)
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.value_objects import Money, PhoneNumber
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.repository.tenant_repository import TenantRepository
from storefront.domain.repository.wallet_repository import WalletRepository


class _PaymentStep:
    """Shared wiring for the two payment handlers."""

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
        component_repo: MealComponentRepository,
        promo_repo: PromoCodeRepository,
        wallet_repo: WalletRepository,
        wallet_enabled: bool = True,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_repo = session_repo
        self._wallet_repo = wallet_repo
        self._pricer = CheckoutPricer(tenant_repo, component_repo, promo_repo)
        self._wallet_enabled = wallet_enabled
        self._today = today

    def _wallet_option(
        self,
        cart: Cart,
        checkout: CheckoutSession,
        client_id: str,
    ) -> tuple[WalletOption, Money | None]:
        summary = self._pricer.price(cart, checkout, client_id, self._today()).summary
        total = summary.grand_total
        balance = self._wallet_repo.get_balance(client_id)
        option = WalletOption.for_order(
            self._wallet_enabled, balance, total if total is not None else summary.subtotal
        )
        return option, total


class ShowPaymentOptionsHandler(_PaymentStep):

    def handle(self, session_key: str, tenant_id: str, client_id: str) -> PaymentOptionsDTO:
        cart = self._session_repo.get_cart(session_key, tenant_id)
        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        wallet, total = self._wallet_option(cart, checkout, client_id)

        return PaymentOptionsDTO(
            providers=[
                (provider.value, provider.label)
                for provider in PaymentProvider
                if provider.is_mobile_money or wallet.visible
            ],
            wallet=WalletOptionDTO(
                visible=wallet.visible,
                enabled=wallet.enabled,
                balance=wallet.balance.amount,
                sufficient=wallet.sufficient,
            ),
            grand_total=total.amount if total is not None else None,
        )


class SelectPaymentMethodHandler(_PaymentStep):

    def handle(
        self,
        session_key: str,
        tenant_id: str,
        client_id: str,
        provider: str,
        raw_phone: str | None = None,
    ) -> StepResult:
        try:
            chosen = PaymentProvider(provider)
        except ValueError:
            return StepResult(
                problem=Problem(ProblemKind.PAYMENT_NOT_SELECTED, "Please select a payment method.")
            )

        cart = self._session_repo.get_cart(session_key, tenant_id)
        checkout = self._session_repo.get_checkout(session_key, tenant_id)

        if chosen is PaymentProvider.WALLET:
            wallet, _ = self._wallet_option(cart, checkout, client_id)
            if not wallet.visible:
                return StepResult(
                    problem=Problem(
                        ProblemKind.WALLET_UNAVAILABLE,
                        "Wallet payments are not available.",
                    )
                )
            if not wallet.sufficient:
                return StepResult(
                    problem=Problem(
                        ProblemKind.WALLET_INSUFFICIENT,
                        f"Your wallet balance ({wallet.balance}) does not cover this order.",
                        {"balance": wallet.balance.amount},
                    )
                )
            checkout.payment = WalletPayment()
        else:
            if raw_phone:
                try:
                    phone = PhoneNumber.parse(raw_phone)
                except ValidationError as exc:
                    return StepResult(problem=Problem(ProblemKind.INVALID_PHONE, str(exc)))
            elif checkout.phone is not None:
                phone = checkout.phone
            else:
                return StepResult(
                    problem=Problem(
                        ProblemKind.PHONE_REQUIRED,
                        f"A phone number is required to pay with {chosen.label}.",
                    )
                )
            checkout.payment = MobileMoneyPayment(provider=chosen, phone=phone)

        self._session_repo.save_checkout(checkout)
        return StepResult()
