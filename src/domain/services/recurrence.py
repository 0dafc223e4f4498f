"""Expansion of transactions into dated modifications."""

from collections.abc import Iterable, Iterator
from datetime import date
from itertools import count

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from src.domain.constants import (
    RTYPE_ANNUALLY,
    RTYPE_BIMONTHLY,
    RTYPE_DAY,
    RTYPE_DAY_OF_MONTH,
    RTYPE_DAY_OF_WEEK,
    RTYPE_NONE,
)
from src.domain.exceptions import LedgerInputError
from src.domain.models.ledger import Recurrence, Transaction
from src.domain.models.projection import GraphRange, Modification

# Indexed like the form's weekday picker: 0 is Sunday.
_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)


def iter_occurrences(recurrence: Recurrence) -> Iterator[date]:
    """Yield the dates a recurrence lands on, in order.

    The iterator honours ``end`` and ``occurrences`` but is otherwise
    unbounded; callers stop consuming once past their own horizon.

    Args:
        recurrence: Rule to expand.

    Yields:
        date: Each occurrence, starting on or after ``recurrence.start``.

    Raises:
        LedgerInputError: If the rule type or cycle is invalid.
    """
    dates = _rule_dates(recurrence)
    for index, occurrence in enumerate(dates):
        if recurrence.occurrences is not None and index >= recurrence.occurrences:
            return
        if recurrence.end is not None and occurrence > recurrence.end:
            return
        yield occurrence


def _rule_dates(recurrence: Recurrence) -> Iterator[date]:
    start = recurrence.start
    rtype = recurrence.rtype
    if rtype == RTYPE_NONE:
        return iter((start,))
    if rtype == RTYPE_DAY:
        step = _cycle(recurrence, default=1, low=1)
        return (start + relativedelta(days=step * k) for k in count())
    if rtype == RTYPE_DAY_OF_WEEK:
        weekday = _cycle(recurrence, default=None, low=0, high=6)
        first = start + relativedelta(weekday=_WEEKDAYS[weekday])
        return (first + relativedelta(weeks=k) for k in count())
    if rtype == RTYPE_DAY_OF_MONTH:
        day = _cycle(recurrence, default=start.day, low=1, high=31)
        return _monthly(start, day, months=1)
    if rtype == RTYPE_BIMONTHLY:
        day = _cycle(recurrence, default=start.day, low=1, high=31)
        return _monthly(start, day, months=2)
    if rtype == RTYPE_ANNUALLY:
        return (start + relativedelta(years=k) for k in count())
    raise LedgerInputError(f"Unknown recurrence type '{rtype}'")


def _monthly(start: date, day: int, months: int) -> Iterator[date]:
    anchor = start.replace(day=1)
    if anchor + relativedelta(day=day) < start:
        anchor = anchor + relativedelta(months=months)
    for k in count():
        yield anchor + relativedelta(months=months * k, day=day)


def _cycle(
    recurrence: Recurrence,
    default: int | None,
    low: int,
    high: int | None = None,
) -> int:
    cycle = recurrence.cycle if recurrence.cycle is not None else default
    if cycle is None:
        raise LedgerInputError(
            f"Recurrence '{recurrence.rtype}' requires a cycle value"
        )
    if cycle < low or (high is not None and cycle > high):
        raise LedgerInputError(
            f"Cycle {cycle} is out of range for recurrence '{recurrence.rtype}'"
        )
    return cycle


def validate_recurrence(recurrence: Recurrence) -> None:
    """Raise LedgerInputError if the recurrence rule cannot be expanded."""
    _rule_dates(recurrence)


def transaction_modifications(
    transaction: Transaction,
    graph_range: GraphRange,
) -> list[Modification]:
    """Return one modification per occurrence of a transaction in range."""
    modifications = []
    for occurrence in iter_occurrences(transaction.recurrence):
        if occurrence > graph_range.end:
            break
        if occurrence < graph_range.start:
            continue
        modifications.append(
            Modification(
                date=occurrence,
                mutate_key=transaction.id,
                y=transaction.value,
            )
        )
    return modifications


def compute_transaction_modifications(
    transactions: Iterable[Transaction],
    graph_range: GraphRange,
) -> list[Modification]:
    """Expand every transaction into its dated modifications.

    Args:
        transactions: Transactions with concrete values.
        graph_range: Projection range; occurrences outside it are skipped.

    Returns:
        list[Modification]: Modifications grouped by transaction, each group
        in date order.
    """
    modifications: list[Modification] = []
    for transaction in transactions:
        modifications.extend(transaction_modifications(transaction, graph_range))
    return modifications


__all__ = [
    "iter_occurrences",
    "validate_recurrence",
    "transaction_modifications",
    "compute_transaction_modifications",
]
