"""JSON-file-backed implementation of PromoCodeRepository.

Codes live in ``promo_codes.json``; every redemption appends an entry
to ``promo_usages.json`` so per-client limits can be counted.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.model.promo import DiscountType, PromoCode, PromoStatus, normalize_code
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.promo_code_repository import PromoCodeRepository
from storefront.infrastructure.persistence.json_codec import date_or_none

logger = logging.getLogger(__name__)


class JsonPromoCodeRepository(PromoCodeRepository):

    def __init__(
        self,
        codes_path: Path,
        usages_path: Path,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._codes_path = codes_path
        self._usages_path = usages_path
        self._currency = currency
        self._ensure_file(codes_path)
        self._ensure_file(usages_path)

    # --- PromoCodeRepository interface ----------------------------------------

    def get_by_code(self, tenant_id: str, code: str) -> PromoCode | None:
        canonical = normalize_code(code)
        for raw in self._load_raw(self._codes_path):
            if raw["tenant_id"] == tenant_id and normalize_code(raw["code"]) == canonical:
                return self._to_domain(raw)
        return None

    def count_client_usages(self, tenant_id: str, code: str, client_id: str) -> int:
        canonical = normalize_code(code)
        return sum(
            1
            for usage in self._load_raw(self._usages_path)
            if usage["tenant_id"] == tenant_id
            and usage["code"] == canonical
            and usage["client_id"] == client_id
        )

    def record_usage(self, promo: PromoCode, client_id: str, order_id: int) -> None:
        promo.record_use()
        self.save(promo)

        usages = self._load_raw(self._usages_path)
        usages.append(
            {
                "tenant_id": promo.tenant_id,
                "code": promo.code,
                "client_id": client_id,
                "order_id": order_id,
                "used_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        self._persist_raw(self._usages_path, usages)
        logger.info("Recorded use %d of promo %s", promo.times_used, promo.code)

    def save(self, promo: PromoCode) -> None:
        codes = self._load_raw(self._codes_path)

        # Upsert on (tenant, code)
        replaced = False
        for i, raw in enumerate(codes):
            if raw["tenant_id"] == promo.tenant_id and normalize_code(raw["code"]) == promo.code:
                codes[i] = self._to_raw(promo)
                replaced = True
                break
        if not replaced:
            codes.append(self._to_raw(promo))

        self._persist_raw(self._codes_path, codes)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(promo: PromoCode) -> dict:
        return {
            "tenant_id": promo.tenant_id,
            "code": promo.code,
            "discount_type": promo.discount_type.value,
            "value": promo.value,
            "starts_at": promo.starts_at.isoformat(),
            "ends_at": promo.ends_at.isoformat() if promo.ends_at else None,
            "minimum_order_amount": promo.minimum_order_amount.amount,
            "status": promo.status.value,
            "max_uses": promo.max_uses,
            "max_uses_per_client": promo.max_uses_per_client,
            "times_used": promo.times_used,
        }

    def _to_domain(self, raw: dict) -> PromoCode:
        return PromoCode(
            tenant_id=raw["tenant_id"],
            code=normalize_code(raw["code"]),
            discount_type=DiscountType(raw["discount_type"]),
            value=raw["value"],
            starts_at=date_or_none(raw["starts_at"]),  # type: ignore[arg-type]
            ends_at=date_or_none(raw.get("ends_at")),
            minimum_order_amount=Money(raw.get("minimum_order_amount", 0), self._currency),
            status=PromoStatus(raw.get("status", PromoStatus.ACTIVE.value)),
            max_uses=raw.get("max_uses", 0),
            max_uses_per_client=raw.get("max_uses_per_client", 0),
            times_used=raw.get("times_used", 0),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _persist_raw(path: Path, rows: list[dict]) -> None:
        path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")

    @staticmethod
    def _ensure_file(path: Path) -> None:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
