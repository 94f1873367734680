"""Abstract repository for client wallet balances."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.value_objects import Money


class WalletRepository(ABC):

    @abstractmethod
    def get_balance(self, client_id: str) -> Money:
        """Return the client's wallet balance; zero when the client has no wallet."""
