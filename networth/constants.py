"""
Global constants for networth.

Purpose
-------
Centralizes default values and magic numbers used throughout the package:
day-count conventions, estimator and simulation defaults, chart styling.

Usage
-----
>>> from networth.constants import DEFAULT_HORIZON_MONTHS, DAYS_PER_MONTH
>>>
>>> months = (curr.date - prev.date).days / DAYS_PER_MONTH

Categories
----------
- Time: day-count conventions for months and years
- Estimation: trailing window and minimum pair spacing
- Projection: growth-rate default and simulation horizons
- Plotting: figure sizes, colors, transparency values
"""

from typing import Tuple

__all__ = [
    # Time
    "DAYS_PER_MONTH",
    "DAYS_PER_YEAR",
    "MONTHS_PER_YEAR",
    "SERIAL_DATE_THRESHOLD",
    # Estimation
    "DEFAULT_CONTRIBUTION_WINDOW",
    "MIN_PAIR_MONTHS",
    # Projection
    "DEFAULT_GROWTH_PCT",
    "DEFAULT_HORIZON_MONTHS",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_FIGSIZE_WIDE",
    "DEFAULT_ALPHA_AREA",
    "DEFAULT_LINEWIDTH",
    "DEFAULT_LINEWIDTH_THICK",
    "CHART_COLORS",
]


# =============================================================================
# Time
# =============================================================================

DAYS_PER_MONTH: float = 30.44
"""Average days per month used to convert record spacing into months."""

DAYS_PER_YEAR: float = 365.25
"""Average days per year used for CAGR and years-to-crossover."""

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (projection sampling and rate conversion)."""

SERIAL_DATE_THRESHOLD: float = 20_000
"""Month cells above this value are read as spreadsheet serial dates."""


# =============================================================================
# Estimation Defaults
# =============================================================================

DEFAULT_CONTRIBUTION_WINDOW: int = 12
"""Trailing raw records used to estimate the monthly contribution."""

MIN_PAIR_MONTHS: float = 0.5
"""Record pairs closer than this (in months) are skipped by the estimator."""


# =============================================================================
# Projection Defaults
# =============================================================================

DEFAULT_GROWTH_PCT: float = 7.0
"""Default assumed annual growth rate, in percent."""

DEFAULT_HORIZON_MONTHS: int = 600
"""Default simulation cap (50 years)."""


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (14, 8)
"""Default figure size (width, height) in inches for standard plots."""

DEFAULT_FIGSIZE_WIDE: Tuple[int, int] = (14, 6)
"""Figure size for wide aspect ratio plots (timeseries, drawdown)."""

DEFAULT_ALPHA_AREA: float = 0.35
"""Default alpha for stacked area and drawdown fills."""

DEFAULT_LINEWIDTH: float = 1.0
"""Default line width for standard plot lines."""

DEFAULT_LINEWIDTH_THICK: float = 2.0
"""Line width for emphasized lines (net worth, crossover marker)."""

CHART_COLORS = {
    "net_worth": "#e2e8f0",
    "drawdown": "#f43f5e",
    "contribution": "#38bdf8",
    "returns": "#f472b6",
}
"""Series colors that do not belong to an account category."""
