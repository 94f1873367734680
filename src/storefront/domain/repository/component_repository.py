"""Abstract repository for the tenant catalog (meal components)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import MealComponent


class MealComponentRepository(ABC):

    @abstractmethod
    def get_by_id(self, tenant_id: str, component_id: str) -> MealComponent | None:
        """Return a component of the tenant's catalog, or None."""

    @abstractmethod
    def get_many(self, tenant_id: str, component_ids: list[str]) -> dict[str, MealComponent]:
        """Return the requested components keyed by ID; unknown IDs are omitted."""
