"""
Type definitions for networth.

Purpose
-------
TypedDict definitions for the JSON-safe dictionaries produced by
``networth.serialization``. Dates are ISO strings, amounts are floats.

Type Definitions
----------------
AggregateDict
    One bucket: label, category totals, total assets, net worth, liquidity.

TrendDict
    Change between the last two points: {"value", "absolute_delta", "percent_delta"}

RiskDict
    Max drawdown, CAGR (with definedness flag), YTD.

ProjectionPointDict
    One yearly projection sample.

CompoundDict
    Contribution-versus-return summary, crossover fields nullable.

ReportDict
    Complete report written by ``networth report``.
"""

from typing import Dict, List, Optional
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "AggregateDict",
    "TrendDict",
    "DrawdownPointDict",
    "RiskDict",
    "RatiosDict",
    "AllocationDict",
    "ProjectionPointDict",
    "CompoundDict",
    "ReportDict",
]


class AggregateDict(TypedDict):
    """
    One display bucket.

    Examples
    --------
    >>> agg: AggregateDict = {
    ...     "date": "2024-03-31", "label": "Mar '24",
    ...     "totals": {"equity": 50_000.0, "fixed_income": 0.0, "cash": 5_000.0,
    ...                "liability": 1_200.0, "other": 0.0},
    ...     "total_assets": 55_000.0, "net_worth": 53_800.0, "liquidity": 5_000.0,
    ... }
    """

    date: str
    label: str
    totals: Dict[str, float]
    total_assets: float
    net_worth: float
    liquidity: float
    accounts: NotRequired[Dict[str, float]]


class TrendDict(TypedDict):
    value: float
    absolute_delta: float
    percent_delta: float


class DrawdownPointDict(TypedDict):
    date: str
    label: str
    net_worth: float
    drawdown: float


class RiskDict(TypedDict):
    """
    Performance statistics.

    ``cagr`` is 0.0 whenever ``cagr_defined`` is False.
    """

    max_drawdown: float
    cagr: float
    cagr_defined: bool
    years: float
    ytd: float


class RatiosDict(TypedDict):
    debt_to_assets: float
    debt_to_equity: float


class AllocationDict(TypedDict):
    category: str
    label: str
    value: float
    color: str


class ProjectionPointDict(TypedDict):
    year: int
    year_offset: int
    contribution: float
    returns: float
    net_worth: float


class CompoundDict(TypedDict):
    """
    Compound-phase summary.

    The three crossover fields are None when ``crossover_reached`` is False.
    """

    current_net_worth: float
    monthly_contribution: float
    current_monthly_return: float
    annual_growth_pct: float
    start_date: str
    as_of: str
    horizon_months: int
    phase_progress_percent: float
    crossover_reached: bool
    crossover_date: Optional[str]
    months_to_crossover: Optional[int]
    years_to_crossover: Optional[float]
    projection_series: List[ProjectionPointDict]


class ReportDict(TypedDict):
    config: Dict[str, object]
    available_years: List[int]
    aggregates: List[AggregateDict]
    drawdown: List[DrawdownPointDict]
    risk: RiskDict
    trends: Optional[Dict[str, TrendDict]]
    ratios: Optional[RatiosDict]
    allocation: List[AllocationDict]
    compound: Optional[CompoundDict]
