"""Domain services package."""

from .balances import resolve_account_chart, two_stepped_balance
from .calendar import build_calendar, default_graph_range, nearest_day_index
from .formula import (
    resolve_computed_amount,
    resolve_dynamic_transactions,
    resolve_transaction_value,
    set_operation,
    set_operation_at,
)
from .recurrence import compute_transaction_modifications
from .stacking import apply_modifications, build_stack, resolve_bar_chart
from .transactions import (
    coerce_paybacks,
    sort_transaction_order,
    transaction_splitter,
)

__all__ = [
    "resolve_account_chart",
    "two_stepped_balance",
    "build_calendar",
    "default_graph_range",
    "nearest_day_index",
    "resolve_computed_amount",
    "resolve_dynamic_transactions",
    "resolve_transaction_value",
    "set_operation",
    "set_operation_at",
    "compute_transaction_modifications",
    "apply_modifications",
    "build_stack",
    "resolve_bar_chart",
    "coerce_paybacks",
    "sort_transaction_order",
    "transaction_splitter",
]
