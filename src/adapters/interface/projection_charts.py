"""Chart presentation of a ledger projection.

Pure transformations turn a ``LedgerProjection`` into trace models, which
are then rendered as Plotly figures:
    - stacked bars per transaction, income above the axis and expenses
      below it, both scaled to the shared band ceiling,
    - one stepped balance line per account.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Literal

from src.domain.models.projection import BarChartSeries, LedgerProjection

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


@dataclass(frozen=True)
class BarTrace:
    """Stacked bar trace of one transaction."""

    key: str
    name: str
    side: Literal["income", "expense"]
    dates: list[date]
    bases: list[Decimal]
    heights: list[Decimal]


@dataclass(frozen=True)
class LineTrace:
    """Balance line of one account."""

    name: str
    vehicle: str
    dates: list[date]
    values: list[Decimal]


def _trace_name(series: BarChartSeries) -> str:
    transaction = series.transaction
    return transaction.description or transaction.category or transaction.id


def _bar_trace(
    series: BarChartSeries,
    side: Literal["income", "expense"],
) -> BarTrace:
    direction = 1 if side == "income" else -1
    return BarTrace(
        key=series.id,
        name=_trace_name(series),
        side=side,
        dates=[point.date for point in series.stack],
        bases=[direction * point.low for point in series.stack],
        heights=[direction * point.height for point in series.stack],
    )


def build_bar_traces(projection: LedgerProjection) -> list[BarTrace]:
    """Return bar traces, income first, each side in draw order."""
    traces = [_bar_trace(series, "income") for series in projection.income]
    traces.extend(
        _bar_trace(series, "expense") for series in projection.expense
    )
    return traces


def build_line_traces(projection: LedgerProjection) -> list[LineTrace]:
    """Return one balance line per projected account."""
    return [
        LineTrace(
            name=series.account.name,
            vehicle=series.vehicle,
            dates=[point.date for point in series.values],
            values=[point.value for point in series.values],
        )
        for series in projection.accounts
    ]


def build_bar_chart_figure(projection: LedgerProjection) -> "go.Figure":
    """Build the stacked income/expense bar chart.

    Args:
        projection: Projection produced by the use case.

    Returns:
        Plotly figure with one bar trace per transaction.
    """
    import plotly.graph_objects as go

    fig = go.Figure()
    for trace in build_bar_traces(projection):
        fig.add_trace(
            go.Bar(
                name=trace.name,
                x=trace.dates,
                y=[float(height) for height in trace.heights],
                base=[float(base) for base in trace.bases],
                legendgroup=trace.side,
                customdata=[trace.key] * len(trace.dates),
            )
        )
    ceiling = float(projection.max_height)
    fig.update_layout(
        barmode="overlay",
        margin=dict(l=8, r=8, t=8, b=8),
        height=480,
    )
    if ceiling:
        fig.update_yaxes(range=[-ceiling, ceiling])
    return fig


def build_account_chart_figure(projection: LedgerProjection) -> "go.Figure":
    """Build the stepped account balance chart.

    Args:
        projection: Projection produced by the use case.

    Returns:
        Plotly figure with one line per account.
    """
    import plotly.graph_objects as go

    fig = go.Figure()
    for trace in build_line_traces(projection):
        fig.add_trace(
            go.Scatter(
                name=trace.name,
                x=trace.dates,
                y=[float(value) for value in trace.values],
                mode="lines",
                line=dict(dash="dash" if trace.vehicle == "debt" else "solid"),
            )
        )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=480,
    )
    return fig


__all__ = [
    "BarTrace",
    "LineTrace",
    "build_bar_traces",
    "build_line_traces",
    "build_bar_chart_figure",
    "build_account_chart_figure",
]
