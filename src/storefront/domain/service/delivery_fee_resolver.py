"""Domain service: Delivery Fee Resolution.

Maps a quarter to the fee the tenant charges for delivering there.  The
rule itself lives on ``DeliveryAreas.fee_for``; this service only loads
the tenant's configuration.  Resolution has no side effects, so calling
it twice with the same quarter yields the same quote.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.delivery import DeliveryFeeQuote
from storefront.domain.repository.tenant_repository import TenantRepository


class DeliveryFeeResolver:

    def __init__(self, tenant_repo: TenantRepository) -> None:
        self._tenant_repo = tenant_repo

    def resolve(self, tenant_id: str, quarter_id: str) -> DeliveryFeeQuote:
        """Return ``available``/``fee`` for the quarter.

        A quarter outside the tenant's areas is reported as unavailable,
        not raised: the client may still pick another quarter or switch
        to pickup.
        """
        tenant = self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise EntityNotFoundError(f"Tenant '{tenant_id}' not found")
        return tenant.delivery_areas.fee_for(quarter_id)
