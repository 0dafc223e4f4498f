"""Tests for recurrence expansion into modifications."""

from datetime import date
from decimal import Decimal
from itertools import islice

import pytest

from src.domain.exceptions import LedgerInputError
from src.domain.models.ledger import Recurrence, Transaction
from src.domain.models.projection import GraphRange, Modification
from src.domain.services.recurrence import (
    compute_transaction_modifications,
    iter_occurrences,
    validate_recurrence,
)

JANUARY = GraphRange(date(2024, 1, 1), date(2024, 1, 31))


def _transaction(id: str, recurrence: Recurrence, value: str = "10") -> Transaction:
    return Transaction(
        id=id,
        type="expense",
        recurrence=recurrence,
        value=Decimal(value),
    )


def _dates(transaction: Transaction, graph_range: GraphRange) -> list[date]:
    return [
        modification.date
        for modification in compute_transaction_modifications(
            [transaction],
            graph_range,
        )
    ]


def test_single_occurrence_inside_and_outside_range() -> None:
    """A non-repeating transaction appears only when its day is in range."""
    inside = _transaction("a", Recurrence(start=date(2024, 1, 10)))
    outside = _transaction("b", Recurrence(start=date(2023, 12, 10)))

    assert compute_transaction_modifications([inside, outside], JANUARY) == [
        Modification(date=date(2024, 1, 10), mutate_key="a", y=Decimal("10")),
    ]


def test_every_n_days() -> None:
    """Daily recurrences step by the cycle."""
    weekly = _transaction(
        "a",
        Recurrence(start=date(2024, 1, 1), rtype="day", cycle=7),
    )

    assert _dates(weekly, JANUARY) == [
        date(2024, 1, 1),
        date(2024, 1, 8),
        date(2024, 1, 15),
        date(2024, 1, 22),
        date(2024, 1, 29),
    ]


def test_day_of_week_uses_sunday_as_zero() -> None:
    """Cycle 5 is Friday, on or after the start."""
    fridays = _transaction(
        "a",
        Recurrence(start=date(2024, 1, 1), rtype="day of week", cycle=5),
    )

    assert _dates(fridays, JANUARY) == [
        date(2024, 1, 5),
        date(2024, 1, 12),
        date(2024, 1, 19),
        date(2024, 1, 26),
    ]


def test_day_of_month_clamps_to_month_end() -> None:
    """Day 31 falls on the last day of shorter months."""
    recurrence = Recurrence(
        start=date(2024, 1, 15),
        rtype="day of month",
        cycle=31,
    )

    assert list(islice(iter_occurrences(recurrence), 4)) == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_day_of_month_before_start_moves_to_next_month() -> None:
    """A day already past in the start month begins the following month."""
    recurrence = Recurrence(
        start=date(2024, 1, 15),
        rtype="day of month",
        cycle=10,
    )

    assert next(iter_occurrences(recurrence)) == date(2024, 2, 10)


def test_bimonthly_and_annual() -> None:
    """Bimonthly skips a month; annual keeps the anniversary."""
    bimonthly = Recurrence(start=date(2024, 1, 1), rtype="bimonthly", cycle=1)
    annual = Recurrence(start=date(2024, 2, 29), rtype="annually")

    assert list(islice(iter_occurrences(bimonthly), 3)) == [
        date(2024, 1, 1),
        date(2024, 3, 1),
        date(2024, 5, 1),
    ]
    assert list(islice(iter_occurrences(annual), 3)) == [
        date(2024, 2, 29),
        date(2025, 2, 28),
        date(2026, 2, 28),
    ]


def test_occurrence_count_includes_days_before_range() -> None:
    """The occurrence limit counts from the start, not from the range."""
    limited = _transaction(
        "a",
        Recurrence(
            start=date(2023, 12, 31),
            rtype="day",
            cycle=1,
            occurrences=3,
        ),
    )

    assert _dates(limited, JANUARY) == [date(2024, 1, 1), date(2024, 1, 2)]


def test_end_date_stops_expansion() -> None:
    """No occurrence is emitted after the end date."""
    ending = _transaction(
        "a",
        Recurrence(
            start=date(2024, 1, 1),
            rtype="day",
            cycle=10,
            end=date(2024, 1, 20),
        ),
    )

    assert _dates(ending, JANUARY) == [
        date(2024, 1, 1),
        date(2024, 1, 11),
    ]


def test_invalid_rules_raise() -> None:
    """Unknown types and out-of-range cycles are input errors."""
    with pytest.raises(LedgerInputError):
        validate_recurrence(Recurrence(start=date(2024, 1, 1), rtype="hourly"))
    with pytest.raises(LedgerInputError):
        validate_recurrence(
            Recurrence(start=date(2024, 1, 1), rtype="day of week")
        )
    with pytest.raises(LedgerInputError):
        validate_recurrence(
            Recurrence(start=date(2024, 1, 1), rtype="day", cycle=0)
        )
    with pytest.raises(LedgerInputError):
        validate_recurrence(
            Recurrence(start=date(2024, 1, 1), rtype="day of month", cycle=32)
        )
