"""Analytics orchestrator for networth

Connects the calculator, aggregator, analytics, estimator and projection
into one pass over a ledger snapshot, driven by an immutable AnalysisConfig.

Data flow
---------
raw records ─┬─ year filter ─ aggregate(view) ─ trends / YTD / ratios / allocation
             │                                 └ drawdown series (drawdown_scope)
             ├─ aggregate(history, "month") ── max drawdown / CAGR (risk_scope)
             └─ contribution estimator ─────── compound projection

The engine keeps no state between calls: rerun it after any ledger change.

Typical usage
-------------
>>> from networth.config import AnalysisConfig
>>> engine = AnalyticsEngine(AnalysisConfig(timeframe="quarter"))
>>> report = engine.run(ledger)
>>> report.risk.max_drawdown
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .aggregation import Aggregate, aggregate, available_years, filter_year
from .analytics import (
    AllocationSlice,
    DrawdownPoint,
    LeverageRatios,
    RiskSummary,
    TrendBlock,
    allocation,
    drawdown_series,
    leverage_ratios,
    risk_summary,
    trend_block,
)
from .config import AnalysisConfig
from .ledger import Ledger, Record
from .projection import CompoundMetrics, compound_metrics

__all__ = [
    "PortfolioReport",
    "AnalyticsEngine",
    "analyze",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PortfolioReport:
    config: AnalysisConfig
    available_years: List[int]
    aggregates: List[Aggregate]
    drawdown: List[DrawdownPoint]
    risk: RiskSummary
    trends: Optional[TrendBlock]
    ratios: Optional[LeverageRatios]
    allocation: List[AllocationSlice]
    compound: Optional[CompoundMetrics]

    @property
    def latest(self) -> Optional[Aggregate]:
        return self.aggregates[-1] if self.aggregates else None

    @property
    def is_empty(self) -> bool:
        return not self.aggregates


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class AnalyticsEngine:
    """Runs every analytics component over a ledger for one configuration."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.cfg = config if config is not None else AnalysisConfig()

    # -------------------- Series --------------------
    def view_records(self, ledger: Ledger) -> List[Record]:
        """Records visible in the dashboard view (year filter applied)."""
        return filter_year(ledger.records, self.cfg.selected_year)

    def view(self, ledger: Ledger) -> List[Aggregate]:
        """Bucketed aggregates of the view."""
        return aggregate(self.view_records(ledger), ledger.columns, self.cfg.timeframe)

    def history(self, ledger: Ledger) -> List[Aggregate]:
        """One aggregate per raw record over the full, unfiltered history."""
        return aggregate(ledger.records, ledger.columns, "month")

    # -------------------- Components --------------------
    def risk(self, ledger: Ledger, view: Optional[List[Aggregate]] = None) -> RiskSummary:
        view = self.view(ledger) if view is None else view
        source = self.history(ledger) if self.cfg.risk_scope == "history" else view
        return risk_summary(source, ytd_aggregates=view)

    def drawdown(self, ledger: Ledger, view: Optional[List[Aggregate]] = None) -> List[DrawdownPoint]:
        view = self.view(ledger) if view is None else view
        source = self.history(ledger) if self.cfg.drawdown_scope == "history" else view
        return drawdown_series(source)

    def compound(self, ledger: Ledger) -> Optional[CompoundMetrics]:
        return compound_metrics(
            ledger.records,
            ledger.columns,
            self.cfg.annual_growth_pct,
            horizon_months=self.cfg.horizon_months,
            window=self.cfg.contribution_window,
            as_of=self.cfg.as_of,
        )

    # -------------------- Full pass --------------------
    def run(self, ledger: Ledger) -> PortfolioReport:
        """Compute the complete report for *ledger*."""
        view = self.view(ledger)
        latest = view[-1] if view else None
        logger.debug(
            "Running analytics: %d records, %d view buckets (%s, year=%s)",
            len(ledger), len(view), self.cfg.timeframe, self.cfg.selected_year,
        )
        return PortfolioReport(
            config=self.cfg,
            available_years=available_years(ledger.records),
            aggregates=view,
            drawdown=self.drawdown(ledger, view),
            risk=self.risk(ledger, view),
            trends=trend_block(view) if view else None,
            ratios=leverage_ratios(latest) if latest is not None else None,
            allocation=allocation(latest) if latest is not None else [],
            compound=self.compound(ledger),
        )


def analyze(ledger: Ledger, config: Optional[AnalysisConfig] = None) -> PortfolioReport:
    """Shortcut for ``AnalyticsEngine(config).run(ledger)``."""
    return AnalyticsEngine(config).run(ledger)
