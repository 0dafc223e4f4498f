"""Ledger source reading a JSON document from disk."""

from decimal import Decimal
import json
from pathlib import Path
from typing import Any

from src.domain.models.ledger import Account, Transaction
from src.domain.services.ingestion import (
    parse_account,
    parse_many,
    parse_transaction,
)
from src.infrastructure.logging.logger import get_app_logger


class JsonLedgerSource:
    """Ledger source backed by ``{"transactions": [...], "accounts": [...]}``.

    The document is read once, on first access.
    """

    def __init__(self, path: Path | str, logger=None) -> None:
        """Initialize the source.

        Args:
            path: Path to the JSON ledger document.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._path = Path(path)
        self._logger = logger or get_app_logger()
        self._transactions: list[Transaction] | None = None
        self._accounts: list[Account] | None = None
        self._issues: list[str] = []

    def fetch_transactions(self) -> list[Transaction]:
        self._load()
        return list(self._transactions or [])

    def fetch_accounts(self) -> list[Account]:
        self._load()
        return list(self._accounts or [])

    def fetch_issues(self) -> list[str]:
        self._load()
        return list(self._issues)

    def _load(self) -> None:
        if self._transactions is not None:
            return
        document = self._read_document()
        self._transactions, transaction_issues = parse_many(
            document.get("transactions"),
            parse_transaction,
            self._logger,
        )
        self._accounts, account_issues = parse_many(
            document.get("accounts"),
            parse_account,
            self._logger,
        )
        self._issues = transaction_issues + account_issues
        self._logger.info(
            f"Read ledger {self._path}: {len(self._transactions)} "
            f"transactions, {len(self._accounts)} accounts"
        )

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            raise RuntimeError(f"Ledger file not found: {self._path}")
        try:
            document = json.loads(
                self._path.read_text(encoding="utf-8"),
                parse_float=Decimal,
            )
        except json.JSONDecodeError as exc:
            raise RuntimeError(
                f"Ledger file {self._path} is not valid JSON: {exc}"
            ) from exc
        if not isinstance(document, dict):
            raise RuntimeError(
                f"Ledger file {self._path} must contain a JSON object"
            )
        return document


__all__ = ["JsonLedgerSource"]
