"""
Compound projection simulator for networth.

Purpose
-------
Forward-simulates net worth under a steady monthly contribution and an
assumed annual growth rate, and locates the *phase crossover*: the first
simulated month in which the investment return meets or exceeds the
contribution.

Simulation
----------
Starting from the most recent record's date, each month step does:

    r_t   = W_t * (g / 100 / 12)
    if r_t >= c and no crossover yet: crossover at this step
    W_t+1 = W_t + c + r_t

The walk always covers the full horizon (default 600 months), so the
yearly-sampled series shows both the linear and the exponential phase.
A horizon reached without crossover is reported explicitly: the crossover
fields are None and ``crossover_reached`` is False.

Typical usage
-------------
>>> from datetime import date
>>> run = simulate(200_000, 500, 6.0, date(2025, 1, 1), horizon_months=24)
>>> run.crossover_step
0
>>> len(run.series)
2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from .calculator import net_worth
from .constants import (
    DEFAULT_CONTRIBUTION_WINDOW,
    DEFAULT_HORIZON_MONTHS,
    MONTHS_PER_YEAR,
)
from .estimation import estimate_monthly_contribution, monthly_rate
from .ledger import Column, Record
from .utils import month_dates, years_between

__all__ = [
    "ProjectionPoint",
    "ProjectionRun",
    "CompoundMetrics",
    "simulate",
    "phase_progress",
    "project",
    "compound_metrics",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionPoint:
    """One yearly sample of the simulation (taken every 12 month steps)."""

    year: int
    year_offset: int
    contribution: float
    returns: float
    net_worth: float


@dataclass(frozen=True)
class ProjectionRun:
    """Raw simulation output."""

    start: date
    horizon_months: int
    crossover_step: Optional[int]
    crossover_date: Optional[date]
    final_net_worth: float
    series: List[ProjectionPoint]

    @property
    def crossover_reached(self) -> bool:
        return self.crossover_step is not None


@dataclass(frozen=True)
class CompoundMetrics:
    """
    Contribution-versus-return summary for the dashboard.

    Attributes
    ----------
    current_net_worth : float
        Net worth the simulation starts from.
    monthly_contribution : float
        Estimated steady contribution (may be negative).
    current_monthly_return : float
        ``current_net_worth * monthly_rate``.
    phase_progress_percent : float
        Current return as a percentage of the contribution; 100 when the
        contribution is not positive. Not capped at 100.
    crossover_reached : bool
        False when the horizon ends before returns catch up.
    crossover_date, months_to_crossover, years_to_crossover
        None when ``crossover_reached`` is False. Years are measured from
        ``as_of``, rounded to one decimal and floored at 0.
    projection_series : list of ProjectionPoint
        Yearly samples over the whole horizon.
    """

    current_net_worth: float
    monthly_contribution: float
    current_monthly_return: float
    annual_growth_pct: float
    start_date: date
    as_of: date
    horizon_months: int
    phase_progress_percent: float
    crossover_reached: bool
    crossover_date: Optional[date]
    months_to_crossover: Optional[int]
    years_to_crossover: Optional[float]
    projection_series: List[ProjectionPoint]


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def simulate(
    current_net_worth: float,
    monthly_contribution: float,
    annual_growth_pct: float,
    start: date,
    *,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> ProjectionRun:
    """
    Walk *horizon_months* month steps from *start*.

    Parameters
    ----------
    current_net_worth : float
        Starting balance.
    monthly_contribution : float
        Amount added every month (negative for withdrawals).
    annual_growth_pct : float
        Assumed annual growth, in percent; compounded monthly at g/12.
    start : date
        Date of the first simulated month.
    horizon_months : int, default 600
        Number of steps. Non-positive values simulate nothing.

    Returns
    -------
    ProjectionRun
    """
    rate = monthly_rate(annual_growth_pct)
    projected = float(current_net_worth)
    contribution = float(monthly_contribution)

    crossover_step: Optional[int] = None
    crossover_date: Optional[date] = None
    series: List[ProjectionPoint] = []

    for step, sim_date in enumerate(month_dates(start, horizon_months)):
        monthly_return = projected * rate
        if crossover_step is None and monthly_return >= contribution:
            crossover_step = step
            crossover_date = sim_date
        if step % MONTHS_PER_YEAR == 0:
            series.append(
                ProjectionPoint(
                    year=sim_date.year,
                    year_offset=step // MONTHS_PER_YEAR,
                    contribution=contribution,
                    returns=monthly_return,
                    net_worth=projected,
                )
            )
        projected += contribution + monthly_return

    if crossover_step is None:
        logger.debug("No crossover within %d months", horizon_months)
    else:
        logger.debug("Crossover at step %d (%s)", crossover_step, crossover_date)

    return ProjectionRun(
        start=start,
        horizon_months=max(0, int(horizon_months)),
        crossover_step=crossover_step,
        crossover_date=crossover_date,
        final_net_worth=projected,
        series=series,
    )


def phase_progress(current_monthly_return: float, monthly_contribution: float) -> float:
    """Return as a percentage of contribution; 100 when nothing is contributed."""
    if monthly_contribution > 0:
        return current_monthly_return / monthly_contribution * 100.0
    return 100.0


def project(
    current_net_worth: float,
    monthly_contribution: float,
    annual_growth_pct: float,
    start: date,
    *,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    as_of: Optional[date] = None,
) -> CompoundMetrics:
    """
    Build CompoundMetrics from explicit inputs.

    *as_of* is the reference "today" for years-to-crossover; defaults to
    ``date.today()``. A crossover dated on or before *as_of* reports 0 years.
    """
    as_of = date.today() if as_of is None else as_of
    run = simulate(
        current_net_worth,
        monthly_contribution,
        annual_growth_pct,
        start,
        horizon_months=horizon_months,
    )
    current_return = current_net_worth * monthly_rate(annual_growth_pct)

    years: Optional[float] = None
    if run.crossover_date is not None:
        # a crossover dated before as_of has already happened
        years = round(max(0.0, years_between(as_of, run.crossover_date)), 1)

    return CompoundMetrics(
        current_net_worth=float(current_net_worth),
        monthly_contribution=float(monthly_contribution),
        current_monthly_return=current_return,
        annual_growth_pct=float(annual_growth_pct),
        start_date=start,
        as_of=as_of,
        horizon_months=run.horizon_months,
        phase_progress_percent=phase_progress(current_return, monthly_contribution),
        crossover_reached=run.crossover_reached,
        crossover_date=run.crossover_date,
        months_to_crossover=run.crossover_step,
        years_to_crossover=years,
        projection_series=run.series,
    )


def compound_metrics(
    records: Sequence[Record],
    columns: Sequence[Column],
    annual_growth_pct: float,
    *,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    window: int = DEFAULT_CONTRIBUTION_WINDOW,
    as_of: Optional[date] = None,
) -> Optional[CompoundMetrics]:
    """
    Estimate the contribution from raw history and project forward.

    The simulation starts at the most recent record, from that record's net
    worth. Returns None for an empty history.
    """
    if not records:
        return None
    latest = records[-1]
    contribution = estimate_monthly_contribution(
        records, columns, annual_growth_pct, window=window
    )
    return project(
        net_worth(latest, columns),
        contribution,
        annual_growth_pct,
        latest.date,
        horizon_months=horizon_months,
        as_of=as_of,
    )
