"""Abstract repository for the PromoCode aggregate and its usage ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.promo import PromoCode


class PromoCodeRepository(ABC):

    @abstractmethod
    def get_by_code(self, tenant_id: str, code: str) -> PromoCode | None:
        """Return the tenant's code matching the canonical (upper-case) code."""

    @abstractmethod
    def count_client_usages(self, tenant_id: str, code: str, client_id: str) -> int:
        """How many orders this client has placed with the code."""

    @abstractmethod
    def record_usage(self, promo: PromoCode, client_id: str, order_id: int) -> None:
        """Persist the incremented counter and a per-client usage entry."""

    @abstractmethod
    def save(self, promo: PromoCode) -> None:
        """Persist a new or updated promo code."""
