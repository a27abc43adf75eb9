"""General utilities for networth

Contents
--------
- Date helpers (calendar month sequences, day-count conversions)
- Formatting helpers (currency, thousands, percent, signed deltas)
- Matplotlib formatters (thousands_formatter)
"""

from __future__ import annotations

from datetime import date
from typing import List

import pandas as pd

from .constants import DAYS_PER_MONTH, DAYS_PER_YEAR

__all__ = [
    # Dates
    "month_dates",
    "months_between",
    "years_between",
    # Formatting
    "format_currency",
    "format_k",
    "format_percent",
    "format_delta",
    # Matplotlib formatters
    "thousands_formatter",
]


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------

def month_dates(start: date, months: int) -> List[date]:
    """Dates *start*, *start* + 1 month, ... for *months* calendar steps.

    Each step is offset from *start* itself, so a month-end start day is
    clamped per month without drifting (Jan 31 -> Feb 29 -> Mar 31).

    >>> month_dates(date(2024, 1, 31), 3)
    [datetime.date(2024, 1, 31), datetime.date(2024, 2, 29), datetime.date(2024, 3, 31)]
    """
    if months <= 0:
        return []
    first = pd.Timestamp(start)
    return [(first + pd.DateOffset(months=k)).date() for k in range(int(months))]


def months_between(start: date, end: date) -> float:
    """Fractional months between two dates using a 30.44-day month."""
    return (end - start).days / DAYS_PER_MONTH


def years_between(start: date, end: date) -> float:
    """Fractional years between two dates using a 365.25-day year."""
    return (end - start).days / DAYS_PER_YEAR


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_currency(value: float, symbol: str = "$") -> str:
    """
    Format a monetary amount with thousands separators and no decimals.

    Examples
    --------
    >>> format_currency(1234567.8)
    '$1,234,568'
    >>> format_currency(-2500)
    '-$2,500'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.0f}"


def format_k(value: float, symbol: str = "$") -> str:
    """Compact thousands notation, e.g. ``$125k``."""
    return f"{symbol}{value / 1000:.0f}k"


def format_percent(fraction: float, decimals: int = 2) -> str:
    """Format a fraction as a percentage: 0.0725 -> '7.25%'."""
    return f"{fraction * 100:.{decimals}f}%"


def format_delta(value: float, symbol: str = "$") -> str:
    """Signed currency change: positive values get an explicit '+'."""
    text = format_currency(value, symbol)
    return f"+{text}" if value > 0 else text


# ---------------------------------------------------------------------------
# Matplotlib formatters
# ---------------------------------------------------------------------------

def thousands_formatter(x, pos):
    """
    Format axis values as thousands for matplotlib FuncFormatter.

    - 125_000 → "$125k"
    - 0 → "0"

    Examples
    --------
    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    """
    if x == 0:
        return "0"
    return format_k(x)
