"""Abstract repository for the Tenant aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.tenant import Tenant


class TenantRepository(ABC):

    @abstractmethod
    def get_by_id(self, tenant_id: str) -> Tenant | None:
        """Return a tenant with its delivery configuration, or None."""
