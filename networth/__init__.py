"""
networth: Net-Worth Analytics & Compound Projection

Turns a series of dated account-balance snapshots into category totals,
risk/performance statistics and a contribution-versus-return projection.

Modules
-------
- ledger       : Column, Record and the immutable Ledger collection
- calculator   : Per-record category totals and net worth
- aggregation  : Month / quarter / year bucketing
- analytics    : Trends, drawdown, CAGR, YTD, ratios, allocation
- estimation   : Implied monthly contribution from history
- projection   : Compound-phase simulation and crossover
- engine       : One-call orchestration driven by AnalysisConfig
- ingest       : CSV import/export and account classification
"""

from .categories import Category
from .ledger import Column, Record, Ledger
from .config import AnalysisConfig, IngestConfig
from .engine import AnalyticsEngine, PortfolioReport, analyze
from .ingest import read_csv, write_csv, classify

__all__ = [
    "Category",
    "Column",
    "Record",
    "Ledger",
    "AnalysisConfig",
    "IngestConfig",
    "AnalyticsEngine",
    "PortfolioReport",
    "analyze",
    "read_csv",
    "write_csv",
    "classify",
]
