"""Abstract repository for session-scoped state: the cart and the checkout.

Both are keyed by (session key, tenant) so a guest browsing two
storefronts keeps two independent carts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import CheckoutSession


class SessionRepository(ABC):

    @abstractmethod
    def get_cart(self, session_key: str, tenant_id: str) -> Cart:
        """Return the stored cart, or a new empty one."""

    @abstractmethod
    def save_cart(self, cart: Cart) -> None:
        """Persist the cart."""

    @abstractmethod
    def get_checkout(self, session_key: str, tenant_id: str) -> CheckoutSession:
        """Return the stored checkout session, or a new blank one."""

    @abstractmethod
    def save_checkout(self, checkout: CheckoutSession) -> None:
        """Persist the checkout session."""

    @abstractmethod
    def clear(self, session_key: str, tenant_id: str) -> None:
        """Drop both cart and checkout session."""
