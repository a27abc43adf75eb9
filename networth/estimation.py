"""Contribution estimator for networth

Inversely estimates a steady monthly contribution from the trailing raw
history, given an assumed annual growth rate.

Model
-----
For each consecutive pair of records ``(prev, curr)`` spaced ``m`` months
apart (``m = days / 30.44``), the observed net-worth change is split into a
market part, proportional to the prior balance, and a residual attributed
entirely to contributions:

    market_growth = NW_prev * (g / 100 / 12) * m
    implied       = (NW_curr - NW_prev - market_growth) / m

The estimate is the mean of ``implied`` over usable pairs. Pairs with
``m <= 0.5`` are skipped. The result may be negative (net withdrawals).

This is a one-factor approximation, not a regression fit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

import numpy as np

from .calculator import net_worth
from .constants import DAYS_PER_MONTH, DEFAULT_CONTRIBUTION_WINDOW, MIN_PAIR_MONTHS, MONTHS_PER_YEAR
from .ledger import Column, Record

__all__ = [
    "ImpliedContribution",
    "monthly_rate",
    "implied_contributions",
    "estimate_monthly_contribution",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpliedContribution:
    """Decomposition of the net-worth change between two records."""

    start: date
    end: date
    months: float
    start_net_worth: float
    end_net_worth: float
    market_growth: float
    contribution: float


def monthly_rate(annual_growth_pct: float) -> float:
    """Simple monthly rate from an annual percentage (7.0 -> 0.07 / 12)."""
    return annual_growth_pct / 100.0 / MONTHS_PER_YEAR


def implied_contributions(
    records: Sequence[Record],
    columns: Sequence[Column],
    annual_growth_pct: float,
    *,
    window: int = DEFAULT_CONTRIBUTION_WINDOW,
) -> List[ImpliedContribution]:
    """
    Per-pair decomposition over the last *window* records.

    Parameters
    ----------
    records : sequence of Record
        Raw (unbucketed) history sorted ascending by date.
    columns : sequence of Column
        Account definitions.
    annual_growth_pct : float
        Assumed annual growth, in percent.
    window : int, default 12
        Number of trailing records considered.

    Returns
    -------
    list of ImpliedContribution
        One entry per usable pair, oldest first.
    """
    recent = list(records)[-window:] if window > 0 else []
    rate = monthly_rate(annual_growth_pct)

    pairs: List[ImpliedContribution] = []
    skipped = 0
    for prev, curr in zip(recent, recent[1:]):
        months = (curr.date - prev.date).days / DAYS_PER_MONTH
        if months <= MIN_PAIR_MONTHS:
            skipped += 1
            continue
        nw_prev = net_worth(prev, columns)
        nw_curr = net_worth(curr, columns)
        market = nw_prev * rate * months
        pairs.append(
            ImpliedContribution(
                start=prev.date,
                end=curr.date,
                months=months,
                start_net_worth=nw_prev,
                end_net_worth=nw_curr,
                market_growth=market,
                contribution=(nw_curr - nw_prev - market) / months,
            )
        )

    if skipped:
        logger.debug("Skipped %d record pairs spaced <= %.1f months", skipped, MIN_PAIR_MONTHS)
    return pairs


def estimate_monthly_contribution(
    records: Sequence[Record],
    columns: Sequence[Column],
    annual_growth_pct: float,
    *,
    window: int = DEFAULT_CONTRIBUTION_WINDOW,
) -> float:
    """
    Mean implied monthly contribution over the trailing history.

    Returns 0 when fewer than two usable records exist.

    Examples
    --------
    >>> from datetime import date
    >>> cols = [Column("a", "Brokerage", "equity")]
    >>> recs = [Record(date(2024, 1, 1), {"a": 100_000}),
    ...         Record(date(2024, 3, 1), {"a": 104_000})]
    >>> round(estimate_monthly_contribution(recs, cols, 0.0), 2)
    2029.33
    """
    pairs = implied_contributions(records, columns, annual_growth_pct, window=window)
    if not pairs:
        return 0.0
    return float(np.mean([p.contribution for p in pairs]))
