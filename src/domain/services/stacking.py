"""Daily stack construction and additive band stacking."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.models.ledger import Transaction
from src.domain.models.projection import (
    BandPoint,
    BarChartSeries,
    DailyStackRow,
    GraphRange,
    Modification,
)
from src.domain.services.calendar import build_calendar, nearest_day_index
from src.domain.services.recurrence import compute_transaction_modifications
from src.utils.decimal_utils import ZERO


def build_zeroed_rows(
    keys: Sequence[str],
    calendar: Sequence[date],
) -> list[DailyStackRow]:
    """Return one row per day holding zero for every key."""
    return [
        DailyStackRow(date=day, values={key: ZERO for key in keys})
        for day in calendar
    ]


def apply_modifications(
    rows: Sequence[DailyStackRow],
    modifications: Iterable[Modification],
    calendar: tuple[date, ...],
) -> list[DailyStackRow]:
    """Add each modification's magnitude onto its nearest day.

    The sign of ``y`` is ignored: direction is carried by the bucket the
    column belongs to. ``rows`` are left untouched; new rows are returned.

    Args:
        rows: Rows built by ``build_zeroed_rows`` for ``calendar``.
        modifications: Deltas to fold in.
        calendar: Days the rows are aligned to.

    Returns:
        list[DailyStackRow]: New rows holding the folded totals.

    Raises:
        ValueError: If a modification targets a column the rows do not have.
    """
    totals = [dict(row.values) for row in rows]
    for modification in modifications:
        day_totals = totals[nearest_day_index(modification.date, calendar)]
        if modification.mutate_key not in day_totals:
            raise ValueError(
                f"Modification targets unknown column "
                f"'{modification.mutate_key}'"
            )
        day_totals[modification.mutate_key] += abs(modification.y)
    return [
        DailyStackRow(date=row.date, values=values)
        for row, values in zip(rows, totals)
    ]


def build_stack(
    transactions: Sequence[Transaction],
    graph_range: GraphRange,
    calendar: tuple[date, ...] | None = None,
) -> list[DailyStackRow]:
    """Return per-day totals for every transaction over the range."""
    days = calendar if calendar is not None else build_calendar(graph_range)
    keys = [transaction.id for transaction in transactions]
    rows = build_zeroed_rows(keys, days)
    modifications = compute_transaction_modifications(transactions, graph_range)
    return apply_modifications(rows, modifications, days)


def stack_rows(
    rows: Sequence[DailyStackRow],
    keys: Sequence[str],
) -> list[tuple[BandPoint, ...]]:
    """Stack per-day values into cumulative bands.

    Each key's band starts where the previous key's band ended on the same
    day, following ``keys`` order.

    Args:
        rows: Daily rows from ``build_stack``.
        keys: Column order, bottom band first.

    Returns:
        list[tuple[BandPoint, ...]]: One band per key, aligned to ``rows``.
    """
    bands: list[list[BandPoint]] = [[] for _ in keys]
    for row in rows:
        baseline = ZERO
        for index, key in enumerate(keys):
            top = baseline + row.values.get(key, ZERO)
            bands[index].append(BandPoint(date=row.date, low=baseline, high=top))
            baseline = top
    return [tuple(band) for band in bands]


def max_band_height(bands: Iterable[Iterable[BandPoint]]) -> Decimal:
    """Return the highest band top, or zero for an empty surface."""
    return max(
        (point.high for band in bands for point in band),
        default=ZERO,
    )


def resolve_bar_chart(
    transactions: Sequence[Transaction] | None,
    graph_range: GraphRange,
    calendar: tuple[date, ...] | None = None,
) -> list[BarChartSeries]:
    """Return the stacked bar-chart series of ordered transactions.

    Args:
        transactions: Transactions in draw order; None or empty yields [].
        graph_range: Projection range.
        calendar: Optional precomputed calendar for ``graph_range``.

    Returns:
        list[BarChartSeries]: One series per transaction, sharing one
        ``max_height``.
    """
    if not transactions:
        return []
    rows = build_stack(transactions, graph_range, calendar)
    keys = [transaction.id for transaction in transactions]
    bands = stack_rows(rows, keys)
    max_height = max_band_height(bands)
    return [
        BarChartSeries(transaction=transaction, stack=band, max_height=max_height)
        for transaction, band in zip(transactions, bands)
    ]


__all__ = [
    "build_zeroed_rows",
    "apply_modifications",
    "build_stack",
    "stack_rows",
    "max_band_height",
    "resolve_bar_chart",
]
