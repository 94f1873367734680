"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from storefront.infrastructure.config import Config
from storefront.infrastructure.persistence.json_component_repository import (
    JsonMealComponentRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_promo_code_repository import (
    JsonPromoCodeRepository,
)
from storefront.infrastructure.persistence.json_session_repository import (
    JsonSessionRepository,
)
from storefront.infrastructure.persistence.json_tenant_repository import (
    JsonTenantRepository,
)
from storefront.infrastructure.persistence.json_wallet_repository import (
    JsonWalletRepository,
)


def _data_dir(data_dir: str | Path | None) -> Path:
    return Path(data_dir or Config.DATA_DIR)


def tenant_repository(data_dir: str | Path | None = None) -> JsonTenantRepository:
    return JsonTenantRepository(_data_dir(data_dir) / "tenants.json", Config.CURRENCY)


def component_repository(data_dir: str | Path | None = None) -> JsonMealComponentRepository:
    return JsonMealComponentRepository(_data_dir(data_dir) / "components.json", Config.CURRENCY)


def promo_code_repository(data_dir: str | Path | None = None) -> JsonPromoCodeRepository:
    root = _data_dir(data_dir)
    return JsonPromoCodeRepository(
        root / "promo_codes.json", root / "promo_usages.json", Config.CURRENCY
    )


def session_repository(data_dir: str | Path | None = None) -> JsonSessionRepository:
    return JsonSessionRepository(_data_dir(data_dir) / "sessions.json", Config.CURRENCY)


def order_repository(data_dir: str | Path | None = None) -> JsonOrderRepository:
    return JsonOrderRepository(_data_dir(data_dir) / "orders.json", Config.CURRENCY)


def wallet_repository(data_dir: str | Path | None = None) -> JsonWalletRepository:
    return JsonWalletRepository(_data_dir(data_dir) / "wallets.json", Config.CURRENCY)
