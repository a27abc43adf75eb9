"""
Serialization module for networth reports.

Purpose
-------
Renders engine outputs as JSON-safe dictionaries (dates as ISO strings,
amounts as floats) for the CLI and for any presentation layer that wants
plain data rather than dataclasses.

Supports serialization of:
- Aggregate sequences
- Trend blocks, drawdown series, risk summaries, ratios, allocation
- CompoundMetrics with its yearly projection series
- Full PortfolioReport

Example
-------
>>> from networth.engine import analyze
>>> from networth.serialization import save_report
>>> report = analyze(ledger)
>>> save_report(report, Path("report.json"))
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING
from pathlib import Path
from datetime import date
import json

if TYPE_CHECKING:
    from .aggregation import Aggregate
    from .analytics import (
        AllocationSlice,
        DrawdownPoint,
        LeverageRatios,
        RiskSummary,
        TrendBlock,
        TrendDelta,
    )
    from .engine import PortfolioReport
    from .ledger import Column
    from .projection import CompoundMetrics, ProjectionPoint

from .types import (
    AggregateDict,
    AllocationDict,
    CompoundDict,
    DrawdownPointDict,
    ProjectionPointDict,
    RatiosDict,
    ReportDict,
    RiskDict,
    TrendDict,
)

__all__ = [
    "SCHEMA_VERSION",
    "aggregate_to_dict",
    "aggregates_to_dicts",
    "trend_to_dict",
    "trends_to_dict",
    "drawdown_to_dicts",
    "risk_to_dict",
    "ratios_to_dict",
    "allocation_to_dicts",
    "projection_point_to_dict",
    "compound_to_dict",
    "report_to_dict",
    "save_report",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def aggregate_to_dict(
    aggregate: Aggregate,
    columns: Optional[Sequence[Column]] = None,
) -> AggregateDict:
    """
    Convert an Aggregate to its dictionary representation.

    Parameters
    ----------
    aggregate : Aggregate
        Bucket to serialize.
    columns : sequence of Column, optional
        When given, per-account balances are included under "accounts",
        keyed by account name.

    Returns
    -------
    dict
    """
    data: AggregateDict = {
        "date": aggregate.date.isoformat(),
        "label": aggregate.display_label,
        "totals": aggregate.totals.as_dict(),
        "total_assets": aggregate.total_assets,
        "net_worth": aggregate.net_worth,
        "liquidity": aggregate.liquidity,
    }
    if columns is not None:
        data["accounts"] = {c.name: aggregate.record.get(c.id) for c in columns}
    return data


def aggregates_to_dicts(
    aggregates: Sequence[Aggregate],
    columns: Optional[Sequence[Column]] = None,
) -> List[AggregateDict]:
    return [aggregate_to_dict(a, columns) for a in aggregates]


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------

def trend_to_dict(trend: TrendDelta) -> TrendDict:
    return {
        "value": trend.value,
        "absolute_delta": trend.absolute_delta,
        "percent_delta": trend.percent_delta,
    }


def trends_to_dict(block: TrendBlock) -> Dict[str, TrendDict]:
    return {
        "net_worth": trend_to_dict(block.net_worth),
        "total_assets": trend_to_dict(block.total_assets),
        "liability": trend_to_dict(block.liability),
        "liquidity": trend_to_dict(block.liquidity),
    }


def drawdown_to_dicts(points: Sequence[DrawdownPoint]) -> List[DrawdownPointDict]:
    return [
        {
            "date": p.date.isoformat(),
            "label": p.display_label,
            "net_worth": p.net_worth,
            "drawdown": p.drawdown,
        }
        for p in points
    ]


def risk_to_dict(risk: RiskSummary) -> RiskDict:
    return {
        "max_drawdown": risk.max_drawdown,
        "cagr": risk.cagr,
        "cagr_defined": risk.cagr_defined,
        "years": risk.years,
        "ytd": risk.ytd,
    }


def ratios_to_dict(ratios: LeverageRatios) -> RatiosDict:
    return {
        "debt_to_assets": ratios.debt_to_assets,
        "debt_to_equity": ratios.debt_to_equity,
    }


def allocation_to_dicts(slices: Sequence[AllocationSlice]) -> List[AllocationDict]:
    return [
        {"category": s.category.value, "label": s.label, "value": s.value, "color": s.color}
        for s in slices
    ]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def projection_point_to_dict(point: ProjectionPoint) -> ProjectionPointDict:
    return {
        "year": point.year,
        "year_offset": point.year_offset,
        "contribution": point.contribution,
        "returns": point.returns,
        "net_worth": point.net_worth,
    }


def compound_to_dict(metrics: CompoundMetrics) -> CompoundDict:
    """
    Convert CompoundMetrics to a dictionary.

    Crossover fields stay None when the horizon ended without crossover.
    """
    return {
        "current_net_worth": metrics.current_net_worth,
        "monthly_contribution": metrics.monthly_contribution,
        "current_monthly_return": metrics.current_monthly_return,
        "annual_growth_pct": metrics.annual_growth_pct,
        "start_date": metrics.start_date.isoformat(),
        "as_of": metrics.as_of.isoformat(),
        "horizon_months": metrics.horizon_months,
        "phase_progress_percent": metrics.phase_progress_percent,
        "crossover_reached": metrics.crossover_reached,
        "crossover_date": _iso(metrics.crossover_date),
        "months_to_crossover": metrics.months_to_crossover,
        "years_to_crossover": metrics.years_to_crossover,
        "projection_series": [projection_point_to_dict(p) for p in metrics.projection_series],
    }


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def report_to_dict(report: PortfolioReport) -> ReportDict:
    """Convert a complete PortfolioReport to a JSON-safe dictionary."""
    return {
        "config": report.config.model_dump(mode="json"),
        "available_years": list(report.available_years),
        "aggregates": aggregates_to_dicts(report.aggregates),
        "drawdown": drawdown_to_dicts(report.drawdown),
        "risk": risk_to_dict(report.risk),
        "trends": trends_to_dict(report.trends) if report.trends is not None else None,
        "ratios": ratios_to_dict(report.ratios) if report.ratios is not None else None,
        "allocation": allocation_to_dicts(report.allocation),
        "compound": compound_to_dict(report.compound) if report.compound is not None else None,
    }


def save_report(report: PortfolioReport, path: Path) -> None:
    """
    Write a report as JSON, tagged with the schema version.

    Parameters
    ----------
    report : PortfolioReport
        Report to save.
    path : Path
        Output file; parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"schema_version": SCHEMA_VERSION, **report_to_dict(report)}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
