"""Period aggregator for networth

Groups a chronological record sequence into display buckets and computes one
Aggregate per bucket.

Bucketing
---------
- "month"   : every record is its own bucket, labelled like ``Mar '24``.
- "quarter" : key ``Q{1-4} '{yy}``; the bucket keeps the last record seen.
- "year"    : key ``{yyyy}``; the bucket keeps the last record seen.

Records are point-in-time balances, so a quarter or year is represented by
its closing snapshot rather than a sum or average.

Also here: the year filter used by the dashboard view, and a pandas view of
an aggregate sequence for tables and CSV output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Literal, Optional, Sequence, Tuple

import pandas as pd

from .calculator import CategoryTotals, compute_totals
from .categories import Category
from .exceptions import ConfigurationError
from .ledger import Column, Record

__all__ = [
    "Timeframe",
    "TIMEFRAMES",
    "Aggregate",
    "aggregate",
    "bucket_key",
    "month_label",
    "filter_year",
    "available_years",
    "aggregates_to_frame",
]

logger = logging.getLogger(__name__)

Timeframe = Literal["month", "quarter", "year"]
TIMEFRAMES: Tuple[str, ...] = ("month", "quarter", "year")

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Aggregate:
    """
    Derived snapshot for one display bucket.

    Attributes
    ----------
    date : date
        Date of the record representing the bucket.
    display_label : str
        Bucket label (``Mar '24``, ``Q1 '24`` or ``2024``).
    totals : CategoryTotals
        Category sums; ``totals.liability`` is a non-negative magnitude.
    record : Record
        The underlying snapshot, kept for per-account tables.
    """

    date: date
    display_label: str
    totals: CategoryTotals
    record: Record

    @property
    def total_assets(self) -> float:
        return self.totals.total_assets

    @property
    def net_worth(self) -> float:
        return self.totals.net_worth

    @property
    def liquidity(self) -> float:
        return self.totals.liquidity

    @property
    def liability(self) -> float:
        return self.totals.liability


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def month_label(d: date) -> str:
    """Short month name and two-digit year, e.g. ``Mar '24``."""
    return f"{_MONTH_ABBR[d.month - 1]} '{d.year % 100:02d}"


def bucket_key(d: date, timeframe: Timeframe) -> str:
    """Bucket key (and display label) of *d* under *timeframe*."""
    if timeframe == "month":
        return month_label(d)
    if timeframe == "quarter":
        quarter = (d.month - 1) // 3 + 1
        return f"Q{quarter} '{d.year % 100:02d}"
    if timeframe == "year":
        return str(d.year)
    raise ConfigurationError(
        f"timeframe must be one of {', '.join(TIMEFRAMES)}, got '{timeframe}'."
    )


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def aggregate(
    records: Sequence[Record],
    columns: Sequence[Column],
    timeframe: Timeframe = "month",
) -> List[Aggregate]:
    """
    Aggregate ascending *records* into one Aggregate per bucket.

    Parameters
    ----------
    records : sequence of Record
        Snapshots sorted ascending by date.
    columns : sequence of Column
        Account definitions used to categorize values.
    timeframe : {"month", "quarter", "year"}
        Bucketing mode.

    Returns
    -------
    list of Aggregate
        Chronological; empty when *records* is empty.
    """
    if timeframe not in TIMEFRAMES:
        raise ConfigurationError(
            f"timeframe must be one of {', '.join(TIMEFRAMES)}, got '{timeframe}'."
        )

    if timeframe == "month":
        return [
            Aggregate(r.date, month_label(r.date), compute_totals(r, columns), r)
            for r in records
        ]

    buckets: Dict[str, Aggregate] = {}
    for r in records:
        key = bucket_key(r.date, timeframe)
        # later snapshots overwrite earlier ones in the same bucket
        buckets[key] = Aggregate(r.date, key, compute_totals(r, columns), r)

    result = sorted(buckets.values(), key=lambda a: a.date)
    logger.debug("Aggregated %d records into %d %s buckets", len(records), len(result), timeframe)
    return result


# ---------------------------------------------------------------------------
# Year filter
# ---------------------------------------------------------------------------

def filter_year(records: Sequence[Record], year: Optional[int]) -> List[Record]:
    """Keep records dated in *year*; None keeps everything."""
    if year is None:
        return list(records)
    return [r for r in records if r.date.year == int(year)]


def available_years(records: Sequence[Record]) -> List[int]:
    """Distinct record years, most recent first."""
    return sorted({r.date.year for r in records}, reverse=True)


# ---------------------------------------------------------------------------
# DataFrame view
# ---------------------------------------------------------------------------

def aggregates_to_frame(
    aggregates: Sequence[Aggregate],
    columns: Optional[Sequence[Column]] = None,
) -> pd.DataFrame:
    """
    Tabulate aggregates, one row per bucket indexed by date.

    Columns: label, the five category totals, total_assets, net_worth,
    liquidity, and (when *columns* is given) one column per account name.
    """
    header = (
        ["label"]
        + [c.value for c in Category]
        + ["total_assets", "net_worth", "liquidity"]
        + [c.name for c in (columns or ())]
    )
    rows = []
    for agg in aggregates:
        row = {"label": agg.display_label}
        row.update(agg.totals.as_dict())
        row["total_assets"] = agg.total_assets
        row["net_worth"] = agg.net_worth
        row["liquidity"] = agg.liquidity
        for col in columns or ():
            row[col.name] = agg.record.get(col.id)
        rows.append(row)
    index = pd.DatetimeIndex([pd.Timestamp(a.date) for a in aggregates], name="date")
    return pd.DataFrame(rows, index=index, columns=header)
