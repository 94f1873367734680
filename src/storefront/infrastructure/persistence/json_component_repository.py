"""JSON-file-backed implementation of MealComponentRepository."""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.catalog import MealComponent
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.component_repository import MealComponentRepository


class JsonMealComponentRepository(MealComponentRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- MealComponentRepository interface ------------------------------------

    def get_by_id(self, tenant_id: str, component_id: str) -> MealComponent | None:
        return self._load(tenant_id).get(component_id)

    def get_many(self, tenant_id: str, component_ids: list[str]) -> dict[str, MealComponent]:
        components = self._load(tenant_id)
        return {cid: components[cid] for cid in component_ids if cid in components}

    # --- Serialization helpers ------------------------------------------------

    def _load(self, tenant_id: str) -> dict[str, MealComponent]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: MealComponent(
                id=item["id"],
                tenant_id=item["tenant_id"],
                meal_id=item["meal_id"],
                meal_name=item["meal_name"],
                name=item["name"],
                price=Money(item["price"], self._currency),
                unit=item.get("unit", ""),
                available=item.get("available", True),
                stock=item.get("stock"),
                max_quantity=item.get("max_quantity"),
            )
            for item in raw
            if item["tenant_id"] == tenant_id
        }

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
