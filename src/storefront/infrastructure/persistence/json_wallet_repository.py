"""JSON-file-backed implementation of WalletRepository.

``wallets.json`` maps client IDs to balances.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.wallet_repository import WalletRepository


class JsonWalletRepository(WalletRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    def get_balance(self, client_id: str) -> Money:
        balances = json.loads(self._file_path.read_text(encoding="utf-8"))
        return Money(balances.get(client_id, 0), self._currency)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
