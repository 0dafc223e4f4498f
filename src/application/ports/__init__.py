"""Application ports package."""

from .ledger_source import LedgerSourcePort

__all__ = ["LedgerSourcePort"]
