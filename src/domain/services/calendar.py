"""Calendar helpers aligning projection data to days."""

from datetime import date, datetime, timedelta

from src.domain.models.projection import GraphRange

_HALF_DAY = timedelta(hours=12)


def build_calendar(graph_range: GraphRange) -> tuple[date, ...]:
    """Return every day of the range, both ends included.

    Args:
        graph_range: Range to expand.

    Returns:
        tuple[date, ...]: Ordered, gap-free days.

    Raises:
        ValueError: If the range ends before it starts.
    """
    start = _as_day(graph_range.start)
    end = _as_day(graph_range.end)
    if end < start:
        raise ValueError(f"Range end {end} is before start {start}")
    span = (end - start).days
    return tuple(start + timedelta(days=offset) for offset in range(span + 1))


def nearest_day_index(when: date | datetime, calendar: tuple[date, ...]) -> int:
    """Return the index of the calendar day closest to ``when``.

    Dates before or after the calendar clamp to the first or last day.
    Timestamps exactly between two days resolve to the earlier day.

    Args:
        when: Date or timestamp to place.
        calendar: Gap-free ordered days from ``build_calendar``.

    Returns:
        int: Index into ``calendar``.
    """
    if not calendar:
        raise ValueError("Cannot place a date on an empty calendar")
    offset = _as_datetime(when) - _as_datetime(calendar[0])
    index = offset.days
    if offset - timedelta(days=index) > _HALF_DAY:
        index += 1
    return min(max(index, 0), len(calendar) - 1)


def default_graph_range(today: date, days: int) -> GraphRange:
    """Return the range from ``today`` to ``days`` days later."""
    return GraphRange(start=today, end=today + timedelta(days=days))


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime(value.year, value.month, value.day)


__all__ = ["build_calendar", "nearest_day_index", "default_graph_range"]
