"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import copy
from datetime import date

from storefront.domain.model.cart import Cart
from storefront.domain.model.catalog import MealComponent
from storefront.domain.model.checkout import CheckoutSession
from storefront.domain.model.delivery import (
    DeliveryAreas,
    DeliveryQuarter,
    FeeGroup,
    PickupLocation,
    Town,
)
from storefront.domain.model.order import Order
from storefront.domain.model.promo import DiscountType, PromoCode, normalize_code
from storefront.domain.model.tenant import Tenant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.component_repository import MealComponentRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.domain.repository.tenant_repository import TenantRepository
from storefront.domain.repository.wallet_repository import WalletRepository


class FakeTenantRepository(TenantRepository):

    def __init__(self, tenants: list[Tenant] | None = None) -> None:
        self._store: dict[str, Tenant] = {t.id: t for t in tenants or []}

    def get_by_id(self, tenant_id: str) -> Tenant | None:
        return self._store.get(tenant_id)


class FakeMealComponentRepository(MealComponentRepository):

    def __init__(self, components: list[MealComponent] | None = None) -> None:
        self._store: dict[str, MealComponent] = {c.id: c for c in components or []}

    def get_by_id(self, tenant_id: str, component_id: str) -> MealComponent | None:
        component = self._store.get(component_id)
        if component is None or component.tenant_id != tenant_id:
            return None
        return component

    def get_many(self, tenant_id: str, component_ids: list[str]) -> dict[str, MealComponent]:
        found = {cid: self.get_by_id(tenant_id, cid) for cid in component_ids}
        return {cid: c for cid, c in found.items() if c is not None}

    def save(self, component: MealComponent) -> None:
        self._store[component.id] = component


class FakePromoCodeRepository(PromoCodeRepository):

    def __init__(self, promos: list[PromoCode] | None = None) -> None:
        self._store: dict[tuple[str, str], PromoCode] = {}
        self.usages: list[tuple[str, str, str, int]] = []
        for promo in promos or []:
            self.save(promo)

    def get_by_code(self, tenant_id: str, code: str) -> PromoCode | None:
        return self._store.get((tenant_id, normalize_code(code)))

    def count_client_usages(self, tenant_id: str, code: str, client_id: str) -> int:
        return sum(
            1 for (t, c, client, _) in self.usages
            if t == tenant_id and c == normalize_code(code) and client == client_id
        )

    def record_usage(self, promo: PromoCode, client_id: str, order_id: int) -> None:
        promo.record_use()
        self.save(promo)
        self.usages.append((promo.tenant_id, promo.code, client_id, order_id))

    def save(self, promo: PromoCode) -> None:
        self._store[(promo.tenant_id, promo.code)] = promo


class FakeSessionRepository(SessionRepository):
    """Stores deep copies so handlers cannot mutate state without saving."""

    def __init__(self) -> None:
        self._carts: dict[tuple[str, str], Cart] = {}
        self._checkouts: dict[tuple[str, str], CheckoutSession] = {}

    def get_cart(self, session_key: str, tenant_id: str) -> Cart:
        cart = self._carts.get((session_key, tenant_id))
        if cart is None:
            return Cart(session_key=session_key, tenant_id=tenant_id)
        return copy.deepcopy(cart)

    def save_cart(self, cart: Cart) -> None:
        self._carts[(cart.session_key, cart.tenant_id)] = copy.deepcopy(cart)

    def get_checkout(self, session_key: str, tenant_id: str) -> CheckoutSession:
        checkout = self._checkouts.get((session_key, tenant_id))
        if checkout is None:
            return CheckoutSession(session_key=session_key, tenant_id=tenant_id)
        return copy.deepcopy(checkout)

    def save_checkout(self, checkout: CheckoutSession) -> None:
        self._checkouts[(checkout.session_key, checkout.tenant_id)] = copy.deepcopy(checkout)

    def clear(self, session_key: str, tenant_id: str) -> None:
        self._carts.pop((session_key, tenant_id), None)
        self._checkouts.pop((session_key, tenant_id), None)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order

    def all(self) -> list[Order]:
        return list(self._store.values())


class FakeWalletRepository(WalletRepository):

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self._balances = dict(balances or {})

    def get_balance(self, client_id: str) -> Money:
        return Money(self._balances.get(client_id, 0))


# --- Builders -----------------------------------------------------------------

TENANT_ID = "mama-ndole"
TODAY = date(2025, 6, 15)


def make_component(
    component_id: str = "ndole",
    price: int = 2500,
    meal_id: str = "meal-1",
    meal_name: str = "Ndole Special",
    tenant_id: str = TENANT_ID,
    currency: str = "XAF",
    **kwargs,
) -> MealComponent:
    return MealComponent(
        id=component_id,
        tenant_id=tenant_id,
        meal_id=meal_id,
        meal_name=meal_name,
        name=kwargs.pop("name", component_id.replace("-", " ").title()),
        price=Money(price, currency),
        **kwargs,
    )


def make_areas() -> DeliveryAreas:
    """Douala quarters priced individually, by group, free and disabled; one in Yaounde."""
    return DeliveryAreas(
        towns=[Town("douala", "Douala"), Town("yaounde", "Yaounde")],
        quarters=[
            DeliveryQuarter("akwa", "Akwa", "douala", individual_fee=Money(1000)),
            DeliveryQuarter("bonapriso", "Bonapriso", "douala",
                            individual_fee=Money(300), fee_group_id="central"),
            DeliveryQuarter("deido", "Deido", "douala", individual_fee=Money(0)),
            DeliveryQuarter("bali", "Bali", "douala",
                            individual_fee=Money(700), available=False),
            DeliveryQuarter("bastos", "Bastos", "yaounde", individual_fee=Money(1500)),
        ],
        fee_groups=[FeeGroup("central", "Central Douala", Money(500))],
        pickup_locations=[PickupLocation("kitchen", "Mama's kitchen", "Rue 1.234, Akwa")],
    )


def make_tenant(
    minimum: int = 0,
    areas: DeliveryAreas | None = None,
    whatsapp: str | None = "+237670000000",
    tenant_id: str = TENANT_ID,
    currency: str = "XAF",
) -> Tenant:
    return Tenant(
        id=tenant_id,
        name="Mama Ndole",
        minimum_order_amount=Money(minimum, currency),
        whatsapp=whatsapp,
        delivery_areas=areas if areas is not None else make_areas(),
    )


def make_promo(
    code: str = "SAVE10",
    discount_type: DiscountType = DiscountType.PERCENTAGE,
    value: int = 10,
    tenant_id: str = TENANT_ID,
    starts_at: date = date(2025, 1, 1),
    **kwargs,
) -> PromoCode:
    return PromoCode(
        tenant_id=tenant_id,
        code=code,
        discount_type=discount_type,
        value=value,
        starts_at=starts_at,
        **kwargs,
    )


class CheckoutWorld:
    """All fake repositories of one storefront, plus shortcuts to fill a checkout."""

    def __init__(
        self,
        tenant: Tenant | None = None,
        components: list[MealComponent] | None = None,
        promos: list[PromoCode] | None = None,
        balances: dict[str, int] | None = None,
    ) -> None:
        self.tenants = FakeTenantRepository([tenant or make_tenant(minimum=3000)])
        self.components = FakeMealComponentRepository(
            components if components is not None else [make_component("ndole", price=2500)]
        )
        self.promos = FakePromoCodeRepository(promos or [])
        self.sessions = FakeSessionRepository()
        self.orders = FakeOrderRepository()
        self.wallets = FakeWalletRepository(balances)

    def fill_cart(self, component_id: str = "ndole", quantity: int = 2) -> None:
        cart = self.sessions.get_cart("s1", TENANT_ID)
        cart.add(self.components.get_by_id(TENANT_ID, component_id), quantity)
        self.sessions.save_cart(cart)

    def edit_checkout(self, **changes) -> None:
        checkout = self.sessions.get_checkout("s1", TENANT_ID)
        for name, value in changes.items():
            setattr(checkout, name, value)
        self.sessions.save_checkout(checkout)

    def set_price(self, component_id: str, price: int) -> None:
        component = self.components.get_by_id(TENANT_ID, component_id)
        component.price = Money(price)
        self.components.save(component)
