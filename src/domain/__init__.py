"""Domain package for ledger projection rules and core models."""

from .exceptions import (
    LedgerInputError,
    MalformedFormulaError,
    PaybackIndirectionError,
)
from .models import (
    Account,
    AccountSeries,
    BarChartSeries,
    GraphRange,
    LedgerProjection,
    Operation,
    OperationNode,
    Transaction,
)
from .services import (
    coerce_paybacks,
    resolve_account_chart,
    resolve_bar_chart,
    sort_transaction_order,
    transaction_splitter,
)

__all__ = [
    "LedgerInputError",
    "MalformedFormulaError",
    "PaybackIndirectionError",
    "Account",
    "AccountSeries",
    "BarChartSeries",
    "GraphRange",
    "LedgerProjection",
    "Operation",
    "OperationNode",
    "Transaction",
    "coerce_paybacks",
    "resolve_account_chart",
    "resolve_bar_chart",
    "sort_transaction_order",
    "transaction_splitter",
]
