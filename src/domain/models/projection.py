"""Domain models for projected chart series."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from src.domain.models.ledger import Account, Transaction


@dataclass(frozen=True)
class GraphRange:
    """Inclusive date range to project over."""

    start: date
    end: date


@dataclass(frozen=True)
class Modification:
    """Signed delta applied to one transaction column on one day."""

    date: date | datetime
    mutate_key: str
    y: Decimal


@dataclass(frozen=True)
class DailyStackRow:
    """Per-transaction totals for one calendar day."""

    date: date
    values: Mapping[str, Decimal]


@dataclass(frozen=True)
class BandPoint:
    """Stacked band bounds for one day."""

    date: date
    low: Decimal
    high: Decimal

    @property
    def height(self) -> Decimal:
        return self.high - self.low


@dataclass(frozen=True)
class BarChartSeries:
    """Stacked band of one transaction plus the shared chart ceiling."""

    transaction: Transaction
    stack: tuple[BandPoint, ...]
    max_height: Decimal

    @property
    def id(self) -> str:
        return self.transaction.id

    @property
    def raccount(self) -> str | None:
        return self.transaction.raccount


@dataclass(frozen=True)
class BalancePoint:
    """Account balance at one step of a day."""

    date: date
    value: Decimal


@dataclass(frozen=True)
class AccountSeries:
    """Balance line of one account, two points per calendar day."""

    account: Account
    values: tuple[BalancePoint, ...]
    interest: Decimal | None
    vehicle: str


@dataclass(frozen=True)
class LedgerProjection:
    """Income and expense bands with the derived account balances.

    Attributes:
        income: Bar-chart series for income transactions.
        expense: Bar-chart series for expense transactions.
        accounts: Balance series for accounts with contributions.
        issues: Messages for transactions or accounts that were excluded.
    """

    income: list[BarChartSeries]
    expense: list[BarChartSeries]
    accounts: list[AccountSeries]
    issues: list[str] = field(default_factory=list)

    @property
    def max_height(self) -> Decimal:
        """Return the largest chart ceiling across income and expense."""
        heights = [
            series.max_height for series in self.income + self.expense
        ]
        return max(heights, default=Decimal("0"))


__all__ = [
    "GraphRange",
    "Modification",
    "DailyStackRow",
    "BandPoint",
    "BarChartSeries",
    "BalancePoint",
    "AccountSeries",
    "LedgerProjection",
]
