"""Account balance projection from stacked bar-chart bands."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.models.ledger import Account
from src.domain.models.projection import (
    AccountSeries,
    BalancePoint,
    BarChartSeries,
)
from src.utils.decimal_utils import ZERO, coerce_decimal


def account_band_totals(
    account: Account,
    series: Iterable[BarChartSeries],
) -> list[Decimal]:
    """Sum the daily band heights of the series booked on an account.

    Args:
        account: Account to collect for.
        series: Income or expense bar-chart series.

    Returns:
        list[Decimal]: One total per day, or [] if no series matches.
    """
    totals: list[Decimal] = []
    for item in series:
        if item.raccount != account.name:
            continue
        heights = [point.height for point in item.stack]
        if not totals:
            totals = heights
        else:
            totals = [total + height for total, height in zip(totals, heights)]
    return totals


def _day_value(values: Sequence[Decimal], index: int) -> Decimal:
    if index >= len(values):
        return ZERO
    return abs(coerce_decimal(values[index]))


def two_stepped_balance(
    starting: Decimal,
    income: Sequence[Decimal],
    expense: Sequence[Decimal],
    calendar: Sequence[date],
    is_debt: bool,
) -> list[BalancePoint]:
    """Walk the balance forward, expenses first then income, each day.

    Debts grow with expenses while other accounts shrink. Two points are
    emitted per day so the line steps at the same day boundaries as the
    bars.

    Args:
        starting: Opening balance; its magnitude is used.
        income: Daily income totals for the account.
        expense: Daily expense totals for the account.
        calendar: Days the totals are aligned to.
        is_debt: Whether expenses increase the balance.

    Returns:
        list[BalancePoint]: Post-expense and post-income points per day.
    """
    slope = 1 if is_debt else -1
    values: list[BalancePoint] = []
    previous = abs(coerce_decimal(starting))
    for index in range(max(len(income), len(expense))):
        first_step = previous + slope * _day_value(expense, index)
        second_step = first_step + _day_value(income, index)
        day = calendar[index]
        values.append(BalancePoint(date=day, value=first_step))
        values.append(BalancePoint(date=day, value=second_step))
        previous = second_step
    return values


def resolve_account_chart(
    accounts: Iterable[Account] | None,
    income: Sequence[BarChartSeries],
    expense: Sequence[BarChartSeries],
) -> list[AccountSeries]:
    """Return balance lines for every account with contributions.

    Args:
        accounts: Tracked accounts.
        income: Income bar-chart series.
        expense: Expense bar-chart series.

    Returns:
        list[AccountSeries]: Accounts without any point are left out.
    """
    if not accounts:
        return []
    reference = next(iter(list(income) + list(expense)), None)
    if reference is None:
        return []
    calendar = [point.date for point in reference.stack]

    graph_accounts = []
    for account in accounts:
        values = two_stepped_balance(
            account.starting,
            account_band_totals(account, income),
            account_band_totals(account, expense),
            calendar,
            account.is_debt,
        )
        if not values:
            continue
        graph_accounts.append(
            AccountSeries(
                account=account,
                values=tuple(values),
                interest=account.interest,
                vehicle=account.vehicle,
            )
        )
    return graph_accounts


__all__ = [
    "account_band_totals",
    "two_stepped_balance",
    "resolve_account_chart",
]
