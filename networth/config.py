"""
Configuration management module for networth.

Purpose
-------
Centralized configuration using Pydantic models. Each engine call receives an
explicit, immutable configuration snapshot instead of reading mutable view
state (selected timeframe, year filter, growth-rate slider).

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON
- Environment-aware: AppSettings reads NETWORTH_* variables and .env files

Example
-------
>>> from networth.config import AnalysisConfig
>>> cfg = AnalysisConfig(timeframe="quarter", annual_growth_pct=6.5)
>>> cfg.horizon_months
600
>>> cfg.model_copy(update={"horizon_months": 240}).horizon_months
240
"""

from __future__ import annotations
from typing import Optional, Literal
import datetime

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_CONTRIBUTION_WINDOW,
    DEFAULT_GROWTH_PCT,
    DEFAULT_HORIZON_MONTHS,
)

__all__ = [
    "AnalysisConfig",
    "IngestConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Analysis Configuration
# ---------------------------------------------------------------------------

class AnalysisConfig(BaseModel):
    """
    Parameters for one analytics pass over a ledger.

    Attributes
    ----------
    timeframe : str
        Bucketing of the view: "month", "quarter" or "year".
    selected_year : int, optional
        Restrict the view to one calendar year. None shows all years. The
        contribution estimator and projection always use the full history.
    annual_growth_pct : float
        Assumed annual growth rate, in percent (7.0 means 7%).
    horizon_months : int
        Projection cap in months. 600 (50 years) by default; 240 gives a
        20-year view.
    drawdown_scope : str
        Series behind the drawdown chart: "view" (filtered, bucketed) or
        "history" (every raw record).
    risk_scope : str
        Series behind max drawdown and CAGR: "view" or "history".
    contribution_window : int
        Trailing raw records used to estimate the monthly contribution.
    as_of : date, optional
        Reference "today" for years-to-crossover. None uses date.today().

    Examples
    --------
    >>> cfg = AnalysisConfig(timeframe="year", selected_year=2024)
    >>> cfg.risk_scope
    'history'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeframe: Literal["month", "quarter", "year"] = Field(
        default="month",
        description="Bucketing of the dashboard view"
    )
    selected_year: Optional[int] = Field(
        default=None,
        ge=1900,
        le=2200,
        description="Restrict the view to one calendar year"
    )
    annual_growth_pct: float = Field(
        default=DEFAULT_GROWTH_PCT,
        ge=-50.0,
        le=100.0,
        description="Assumed annual growth rate (percent)"
    )
    horizon_months: int = Field(
        default=DEFAULT_HORIZON_MONTHS,
        ge=1,
        le=1200,
        description="Projection horizon cap (months)"
    )
    drawdown_scope: Literal["view", "history"] = Field(
        default="view",
        description="Series used for the drawdown chart"
    )
    risk_scope: Literal["view", "history"] = Field(
        default="history",
        description="Series used for max drawdown and CAGR"
    )
    contribution_window: int = Field(
        default=DEFAULT_CONTRIBUTION_WINDOW,
        ge=2,
        le=600,
        description="Trailing records used by the contribution estimator"
    )
    as_of: Optional[datetime.date] = Field(
        default=None,
        description="Reference date for years-to-crossover"
    )


# ---------------------------------------------------------------------------
# Ingestion Configuration
# ---------------------------------------------------------------------------

class IngestConfig(BaseModel):
    """
    Parameters for CSV import.

    Attributes
    ----------
    on_conflict : str
        Policy for two rows with the same date: "reject", "overwrite"
        (later row wins) or "merge" (later row's values win per column).
    skip_total_columns : bool
        Ignore headers containing "total" (spreadsheet subtotal columns).

    Examples
    --------
    >>> IngestConfig(on_conflict="merge").on_conflict
    'merge'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    on_conflict: Literal["reject", "overwrite", "merge"] = Field(
        default="overwrite",
        description="Duplicate-date policy"
    )
    skip_total_columns: bool = Field(
        default=True,
        description="Ignore subtotal columns"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with NETWORTH_ (e.g., NETWORTH_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    log_level : str
        Logging level for the CLI: "DEBUG", "INFO", "WARNING", "ERROR".
    default_growth_pct : float
        Growth rate used by the CLI when --growth is not given.
    default_horizon_months : int
        Projection cap used by the CLI when --horizon is not given.
    currency_symbol : str
        Symbol used when formatting amounts.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="NETWORTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    default_growth_pct: float = Field(
        default=DEFAULT_GROWTH_PCT,
        ge=-50.0,
        le=100.0,
        description="Default assumed annual growth (percent)"
    )
    default_horizon_months: int = Field(
        default=DEFAULT_HORIZON_MONTHS,
        ge=1,
        le=1200,
        description="Default projection horizon (months)"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=4,
        description="Currency symbol for formatted output"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v
