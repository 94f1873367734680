"""Application services: delivery method, delivery location and pickup point.

Selecting a quarter resolves and stores its delivery fee.  A quarter the
cook does not serve never aborts the checkout: the result carries the
ways out (another quarter, switching to pickup, contacting the cook) and
the cart stays untouched.
"""

from __future__ import annotations

import logging

from storefront.application.dto import DeliveryFeeDTO, StepResult, quote_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.checkout import DeliveryLocation
from storefront.domain.model.delivery import DeliveryFeeQuote, DeliveryMethod
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.tenant import Tenant
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.repository.tenant_repository import TenantRepository
from storefront.domain.service.delivery_fee_resolver import DeliveryFeeResolver

logger = logging.getLogger(__name__)


def _load_tenant(tenant_repo: TenantRepository, tenant_id: str) -> Tenant:
    tenant = tenant_repo.get_by_id(tenant_id)
    if tenant is None:
        raise EntityNotFoundError(f"Tenant '{tenant_id}' not found")
    return tenant


class ResolveDeliveryFeeHandler:
    """Query: what would delivery to this quarter cost?"""

    def __init__(self, tenant_repo: TenantRepository) -> None:
        self._resolver = DeliveryFeeResolver(tenant_repo)

    def handle(self, tenant_id: str, quarter_id: str) -> DeliveryFeeDTO:
        return quote_to_dto(self._resolver.resolve(tenant_id, quarter_id))


class SelectDeliveryMethodHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
    ) -> None:
        self._session_repo = session_repo
        self._tenant_repo = tenant_repo

    def handle(self, session_key: str, tenant_id: str, method: str) -> StepResult:
        try:
            chosen = DeliveryMethod(method)
        except ValueError:
            return StepResult(
                problem=Problem(
                    ProblemKind.DELIVERY_METHOD_UNAVAILABLE,
                    "Invalid delivery method selected.",
                )
            )

        tenant = _load_tenant(self._tenant_repo, tenant_id)
        if not tenant.delivery_areas.offers(chosen):
            return StepResult(
                problem=Problem(
                    ProblemKind.DELIVERY_METHOD_UNAVAILABLE,
                    f"{chosen.value.capitalize()} is not available for this cook.",
                )
            )

        # The quarter is kept when switching to pickup so switching back
        # restores it; the fee for pickup is always zero.
        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.delivery_method = chosen
        self._session_repo.save_checkout(checkout)
        return StepResult()


class SelectDeliveryLocationHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
    ) -> None:
        self._session_repo = session_repo
        self._tenant_repo = tenant_repo
        self._resolver = DeliveryFeeResolver(tenant_repo)

    def handle(
        self,
        session_key: str,
        tenant_id: str,
        town_id: str,
        quarter_id: str,
        neighbourhood: str = "",
    ) -> StepResult:
        tenant = _load_tenant(self._tenant_repo, tenant_id)
        quote = self._resolver.resolve(tenant_id, quarter_id)

        quarter = tenant.delivery_areas.quarter(quarter_id)
        if quarter is not None and quarter.town_id != town_id:
            quote = DeliveryFeeQuote(
                quarter_id=quarter_id, available=False, fee=None, quarter_name=quarter.name
            )

        if not quote.available:
            logger.info(
                "Tenant %s does not deliver to quarter %s (town %s)",
                tenant_id, quarter_id, town_id,
            )
            return StepResult(
                problem=Problem(
                    ProblemKind.QUARTER_UNAVAILABLE,
                    "The selected quarter is not in the delivery area.",
                ),
                delivery_fee=quote_to_dto(quote),
                alternatives=self._alternatives(tenant, quote.quarter_name, quote.town_name),
            )

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.delivery_method = DeliveryMethod.DELIVERY
        checkout.delivery_location = DeliveryLocation(
            town_id=town_id,
            quarter_id=quarter_id,
            neighbourhood=neighbourhood.strip(),
            fee=quote.fee,
        )
        self._session_repo.save_checkout(checkout)
        return StepResult(delivery_fee=quote_to_dto(quote))

    @staticmethod
    def _alternatives(tenant: Tenant, quarter_name: str | None, town_name: str | None) -> dict:
        alternatives: dict = {
            "can_switch_to_pickup": tenant.delivery_areas.offers_pickup,
            "contact": tenant.contact_details() if tenant.has_contact else None,
        }
        if tenant.whatsapp:
            alternatives["whatsapp_message"] = tenant.whatsapp_message(
                quarter_name or "my quarter", town_name or "my town"
            )
        return alternatives


class SelectPickupLocationHandler:

    def __init__(
        self,
        session_repo: SessionRepository,
        tenant_repo: TenantRepository,
    ) -> None:
        self._session_repo = session_repo
        self._tenant_repo = tenant_repo

    def handle(self, session_key: str, tenant_id: str, pickup_location_id: str) -> StepResult:
        tenant = _load_tenant(self._tenant_repo, tenant_id)
        if tenant.delivery_areas.pickup_location(pickup_location_id) is None:
            return StepResult(
                problem=Problem(
                    ProblemKind.PICKUP_LOCATION_UNAVAILABLE,
                    "The selected pickup location is no longer available.",
                )
            )

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.delivery_method = DeliveryMethod.PICKUP
        checkout.pickup_location_id = pickup_location_id
        self._session_repo.save_checkout(checkout)
        return StepResult()
