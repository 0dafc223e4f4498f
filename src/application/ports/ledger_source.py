"""Application port for loading declared ledger data."""

from typing import Protocol

from src.domain.models.ledger import Account, Transaction


class LedgerSourcePort(Protocol):
    """Port exposing the transactions and accounts to project."""

    def fetch_transactions(self) -> list[Transaction]:
        """Return declared transactions."""

    def fetch_accounts(self) -> list[Account]:
        """Return tracked accounts."""

    def fetch_issues(self) -> list[str]:
        """Return messages for raw items that could not be loaded."""


__all__ = ["LedgerSourcePort"]
