"""JSON-file-backed implementation of TenantRepository.

Tenants and their delivery configuration are maintained by the cooks'
dashboard; the storefront only reads them.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.delivery import (
    DeliveryAreas,
    DeliveryQuarter,
    FeeGroup,
    PickupLocation,
    Town,
)
from storefront.domain.model.tenant import Tenant
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.tenant_repository import TenantRepository


class JsonTenantRepository(TenantRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- TenantRepository interface -------------------------------------------

    def get_by_id(self, tenant_id: str) -> Tenant | None:
        for raw in self._load_raw():
            if raw["id"] == tenant_id:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    def _to_domain(self, raw: dict) -> Tenant:
        areas = DeliveryAreas(
            towns=[Town(id=t["id"], name=t["name"]) for t in raw.get("towns", [])],
            quarters=[
                DeliveryQuarter(
                    id=q["id"],
                    name=q["name"],
                    town_id=q["town_id"],
                    individual_fee=self._money(q.get("fee")),
                    fee_group_id=q.get("fee_group_id"),
                    available=q.get("available", True),
                )
                for q in raw.get("quarters", [])
            ],
            fee_groups=[
                FeeGroup(id=g["id"], name=g["name"], fee=self._money(g.get("fee")))
                for g in raw.get("fee_groups", [])
            ],
            pickup_locations=[
                PickupLocation(
                    id=p["id"],
                    name=p["name"],
                    address=p.get("address", ""),
                    instructions=p.get("instructions", ""),
                )
                for p in raw.get("pickup_locations", [])
            ],
        )
        return Tenant(
            id=raw["id"],
            name=raw["name"],
            minimum_order_amount=self._money(raw.get("minimum_order_amount")),
            whatsapp=raw.get("whatsapp"),
            phone=raw.get("phone"),
            delivery_areas=areas,
        )

    def _money(self, amount: int | None) -> Money:
        return Money(amount or 0, self._currency)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
