"""
Risk and performance analytics for networth.

Purpose
-------
Computes dashboard statistics over an aggregated net-worth series:

- Trend deltas between the last two points (value, absolute, percent)
- Drawdown series against a running maximum, and the maximum drawdown
- CAGR between the first and last point
- Year-to-date change
- Leverage ratios and allocation breakdown of the latest point

All functions are pure and accept the Aggregate sequences produced by
``networth.aggregation.aggregate``. For an all-time view, pass
``aggregate(records, columns, "month")`` over the full history.

Guards
------
Mathematically undefined cases resolve to documented defaults instead of
raising: percent deltas over a zero base are 0, drawdown against a
non-positive running maximum is 0, CAGR with a non-positive endpoint is 0
and flagged with ``cagr_defined=False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

import numpy as np

from .aggregation import Aggregate
from .categories import ASSET_CATEGORIES, Category
from .constants import DAYS_PER_YEAR

__all__ = [
    "TrendDelta",
    "TrendBlock",
    "DrawdownPoint",
    "RiskSummary",
    "LeverageRatios",
    "AllocationSlice",
    "trend",
    "trend_block",
    "drawdown",
    "drawdown_series",
    "max_drawdown",
    "elapsed_years",
    "compute_cagr",
    "cagr_is_defined",
    "ytd_delta",
    "risk_summary",
    "leverage_ratios",
    "allocation",
]


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TrendDelta:
    value: float
    absolute_delta: float
    percent_delta: float


@dataclass(frozen=True)
class TrendBlock:
    net_worth: TrendDelta
    total_assets: TrendDelta
    liability: TrendDelta
    liquidity: TrendDelta


@dataclass(frozen=True)
class DrawdownPoint:
    """An Aggregate annotated with its drawdown (a non-positive fraction)."""

    aggregate: Aggregate
    drawdown: float

    @property
    def date(self) -> date:
        return self.aggregate.date

    @property
    def display_label(self) -> str:
        return self.aggregate.display_label

    @property
    def net_worth(self) -> float:
        return self.aggregate.net_worth


@dataclass(frozen=True)
class RiskSummary:
    """
    Performance statistics over one series.

    Attributes
    ----------
    max_drawdown : float
        Most negative drawdown (0 for an empty or never-declining series).
    cagr : float
        Compound annual growth rate; 0 when undefined.
    cagr_defined : bool
        False when the series has fewer than two points or a non-positive
        endpoint, so a true 0% CAGR can be told apart from "undefined".
    years : float
        Elapsed years used as CAGR exponent (floored at 1).
    ytd : float
        Latest net worth minus the first net worth of the latest year.
    """

    max_drawdown: float
    cagr: float
    cagr_defined: bool
    years: float
    ytd: float


@dataclass(frozen=True)
class LeverageRatios:
    debt_to_assets: float
    debt_to_equity: float


@dataclass(frozen=True)
class AllocationSlice:
    category: Category
    label: str
    value: float
    color: str


# ---------------------------------------------------------------------------
# Trend deltas
# ---------------------------------------------------------------------------

def trend(values: Sequence[float]) -> TrendDelta:
    """
    Change between the last two values.

    A single value is compared against a zero baseline, which yields an
    absolute delta equal to the value and a percent delta of 0.
    """
    if len(values) == 0:
        return TrendDelta(0.0, 0.0, 0.0)
    current = float(values[-1])
    previous = float(values[-2]) if len(values) > 1 else 0.0
    delta = current - previous
    pct = delta / abs(previous) if previous != 0 else 0.0
    return TrendDelta(current, delta, pct)


def trend_block(aggregates: Sequence[Aggregate]) -> TrendBlock:
    """Trend deltas for net worth, total assets, liability and liquidity."""
    return TrendBlock(
        net_worth=trend([a.net_worth for a in aggregates]),
        total_assets=trend([a.total_assets for a in aggregates]),
        liability=trend([a.liability for a in aggregates]),
        liquidity=trend([a.liquidity for a in aggregates]),
    )


# ---------------------------------------------------------------------------
# Drawdown
# ---------------------------------------------------------------------------

def drawdown(values: Sequence[float]) -> np.ndarray:
    """
    Return drawdown fractions: (W - cummax(W)) / cummax(W).

    Points whose running maximum is not positive get 0, so the result is
    always <= 0 and exactly 0 at every new running maximum.
    """
    w = np.asarray(values, dtype=float)
    if w.size == 0:
        return np.zeros(0, dtype=float)
    running_max = np.maximum.accumulate(w)
    with np.errstate(divide="ignore", invalid="ignore"):
        dd = (w - running_max) / running_max
    dd[running_max <= 0] = 0.0
    return dd


def drawdown_series(aggregates: Sequence[Aggregate]) -> List[DrawdownPoint]:
    """Annotate each aggregate with its drawdown from the running maximum."""
    dd = drawdown([a.net_worth for a in aggregates])
    return [DrawdownPoint(a, float(d)) for a, d in zip(aggregates, dd)]


def max_drawdown(aggregates: Sequence[Aggregate]) -> float:
    """Most negative drawdown of the series (0 when empty)."""
    dd = drawdown([a.net_worth for a in aggregates])
    return float(dd.min()) if dd.size else 0.0


# ---------------------------------------------------------------------------
# CAGR
# ---------------------------------------------------------------------------

def elapsed_years(start: date, end: date) -> float:
    """Years between two dates, floored at 1."""
    return max(1.0, (end - start).days / DAYS_PER_YEAR)


def cagr_is_defined(start_value: float, end_value: float) -> bool:
    return start_value > 0 and end_value > 0


def compute_cagr(start_value: float, end_value: float, start: date, end: date) -> float:
    """
    Compound annual growth rate between two observations.

    Returns 0 when either value is non-positive (no real root exists).
    """
    if not cagr_is_defined(start_value, end_value):
        return 0.0
    years = elapsed_years(start, end)
    return float((end_value / start_value) ** (1.0 / years) - 1.0)


# ---------------------------------------------------------------------------
# Year to date
# ---------------------------------------------------------------------------

def ytd_delta(aggregates: Sequence[Aggregate]) -> float:
    """
    Latest net worth minus the first net worth seen in the latest year.

    Falls back to the first point of the series when no point shares the
    latest year.
    """
    if not aggregates:
        return 0.0
    current = aggregates[-1]
    year_start: Optional[Aggregate] = next(
        (a for a in aggregates if a.date.year == current.date.year), aggregates[0]
    )
    return current.net_worth - year_start.net_worth


def risk_summary(
    aggregates: Sequence[Aggregate],
    *,
    ytd_aggregates: Optional[Sequence[Aggregate]] = None,
) -> RiskSummary:
    """
    Max drawdown, CAGR and YTD over *aggregates*.

    Parameters
    ----------
    aggregates : sequence of Aggregate
        Series used for max drawdown and CAGR (view or full history).
    ytd_aggregates : sequence of Aggregate, optional
        Series used for the YTD delta; defaults to *aggregates*.
    """
    ytd_source = aggregates if ytd_aggregates is None else ytd_aggregates
    if not aggregates:
        return RiskSummary(0.0, 0.0, False, 1.0, ytd_delta(ytd_source))

    first, last = aggregates[0], aggregates[-1]
    defined = len(aggregates) > 1 and cagr_is_defined(first.net_worth, last.net_worth)
    return RiskSummary(
        max_drawdown=max_drawdown(aggregates),
        cagr=compute_cagr(first.net_worth, last.net_worth, first.date, last.date),
        cagr_defined=defined,
        years=elapsed_years(first.date, last.date),
        ytd=ytd_delta(ytd_source),
    )


# ---------------------------------------------------------------------------
# Ratios and allocation
# ---------------------------------------------------------------------------

def leverage_ratios(latest: Aggregate) -> LeverageRatios:
    """Debt-to-assets and debt-to-equity, 0 when the denominator is not positive."""
    liability = latest.liability
    to_assets = liability / latest.total_assets if latest.total_assets > 0 else 0.0
    to_equity = liability / latest.net_worth if latest.net_worth > 0 else 0.0
    return LeverageRatios(to_assets, to_equity)


def allocation(latest: Aggregate) -> List[AllocationSlice]:
    """Asset categories with a strictly positive balance, in display order."""
    slices = []
    for cat in ASSET_CATEGORIES:
        value = latest.totals.get(cat)
        if value > 0:
            slices.append(AllocationSlice(cat, cat.label, value, cat.color))
    return slices
