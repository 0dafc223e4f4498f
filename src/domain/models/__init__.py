"""Domain models package."""

from .ledger import (
    Account,
    IndirectAmount,
    LiteralAmount,
    Operation,
    OperationNode,
    Payback,
    PaybackAmount,
    PaybackEntry,
    Recurrence,
    ReferenceEntry,
    Transaction,
)
from .projection import (
    AccountSeries,
    BalancePoint,
    BandPoint,
    BarChartSeries,
    DailyStackRow,
    GraphRange,
    LedgerProjection,
    Modification,
)

__all__ = [
    "Account",
    "IndirectAmount",
    "LiteralAmount",
    "Operation",
    "OperationNode",
    "Payback",
    "PaybackAmount",
    "PaybackEntry",
    "Recurrence",
    "ReferenceEntry",
    "Transaction",
    "AccountSeries",
    "BalancePoint",
    "BandPoint",
    "BarChartSeries",
    "DailyStackRow",
    "GraphRange",
    "LedgerProjection",
    "Modification",
]
