"""
Plotting utilities for networth reports.

Purpose
-------
Chart functions for the presentation layer. Each takes engine outputs
(aggregates, drawdown points, compound metrics, allocation slices), draws
one matplotlib figure and returns ``(fig, ax)``; pass ``save_path`` to also
write it to disk.

Charts
------
- plot_net_worth  : stacked category areas with net-worth line
- plot_drawdown   : drawdown area from the running maximum
- plot_projection : yearly contribution vs. return bars, crossover marked
- plot_allocation : pie of positive asset categories
- plot_report     : all four on a 2x2 dashboard
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter, PercentFormatter

from .categories import ASSET_CATEGORIES, Category
from .constants import (
    CHART_COLORS,
    DEFAULT_ALPHA_AREA,
    DEFAULT_FIGSIZE,
    DEFAULT_FIGSIZE_WIDE,
    DEFAULT_LINEWIDTH,
    DEFAULT_LINEWIDTH_THICK,
)
from .utils import thousands_formatter

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from .aggregation import Aggregate
    from .analytics import AllocationSlice, DrawdownPoint
    from .engine import PortfolioReport
    from .projection import CompoundMetrics

__all__ = [
    "plot_net_worth",
    "plot_drawdown",
    "plot_projection",
    "plot_allocation",
    "plot_report",
]


def _new_axes(ax: Optional[Axes], figsize) -> Tuple[Figure, Axes]:
    if ax is not None:
        return ax.figure, ax
    fig, ax = plt.subplots(figsize=figsize)
    return fig, ax


def _finish(fig: Figure, save_path: Optional[str]) -> None:
    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)


# ---------------------------------------------------------------------------
# Net worth
# ---------------------------------------------------------------------------

def plot_net_worth(
    aggregates: Sequence[Aggregate],
    *,
    ax: Optional[Axes] = None,
    figsize=DEFAULT_FIGSIZE_WIDE,
    title: str = "Net Worth by Category",
    save_path: Optional[str] = None,
):
    """
    Stacked asset categories, liabilities below zero, net worth on top.

    Returns
    -------
    (fig, ax)
    """
    fig, ax = _new_axes(ax, figsize)
    x = np.arange(len(aggregates))
    labels = [a.display_label for a in aggregates]

    if aggregates:
        ax.stackplot(
            x,
            *[[a.totals.get(c) for a in aggregates] for c in ASSET_CATEGORIES],
            labels=[c.label for c in ASSET_CATEGORIES],
            colors=[c.color for c in ASSET_CATEGORIES],
            alpha=DEFAULT_ALPHA_AREA,
        )
        ax.fill_between(
            x,
            0,
            [-a.liability for a in aggregates],
            color=Category.LIABILITY.color,
            alpha=DEFAULT_ALPHA_AREA,
            label=Category.LIABILITY.label,
        )
        ax.plot(
            x,
            [a.net_worth for a in aggregates],
            color=CHART_COLORS["net_worth"],
            linewidth=DEFAULT_LINEWIDTH_THICK,
            label="Net Worth",
        )
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
        ax.legend(loc="upper left", fontsize=8, framealpha=0.9)

    ax.axhline(0, color="black", linewidth=DEFAULT_LINEWIDTH, alpha=0.5)
    ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    ax.set_title(title, fontsize=11, fontweight="bold")
    ax.grid(True, alpha=0.3)
    _finish(fig, save_path)
    return fig, ax


# ---------------------------------------------------------------------------
# Drawdown
# ---------------------------------------------------------------------------

def plot_drawdown(
    points: Sequence[DrawdownPoint],
    *,
    ax: Optional[Axes] = None,
    figsize=DEFAULT_FIGSIZE_WIDE,
    title: str = "Drawdown from Peak",
    save_path: Optional[str] = None,
):
    """Drawdown fractions as a filled area below zero."""
    fig, ax = _new_axes(ax, figsize)
    x = np.arange(len(points))
    dd = [p.drawdown for p in points]

    if points:
        ax.fill_between(x, dd, 0, color=CHART_COLORS["drawdown"], alpha=DEFAULT_ALPHA_AREA)
        ax.plot(x, dd, color=CHART_COLORS["drawdown"], linewidth=DEFAULT_LINEWIDTH)
        ax.set_xticks(x)
        ax.set_xticklabels([p.display_label for p in points], rotation=45, ha="right", fontsize=8)
        ax.set_ylim(min(min(dd) * 1.1, -0.01), 0.0)

    ax.yaxis.set_major_formatter(PercentFormatter(xmax=1.0))
    ax.set_title(title, fontsize=11, fontweight="bold")
    ax.grid(True, alpha=0.3)
    _finish(fig, save_path)
    return fig, ax


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def plot_projection(
    metrics: CompoundMetrics,
    *,
    ax: Optional[Axes] = None,
    figsize=DEFAULT_FIGSIZE_WIDE,
    title: str = "Contribution vs. Investment Return",
    save_path: Optional[str] = None,
):
    """
    Monthly contribution and monthly return for each simulated year.

    The crossover year, if reached, is marked with a vertical line.
    """
    fig, ax = _new_axes(ax, figsize)
    series = metrics.projection_series
    years = np.array([p.year for p in series])
    width = 0.4

    if series:
        ax.bar(
            years - width / 2,
            [p.contribution for p in series],
            width=width,
            color=CHART_COLORS["contribution"],
            label="Contribution",
        )
        ax.bar(
            years + width / 2,
            [p.returns for p in series],
            width=width,
            color=CHART_COLORS["returns"],
            label="Return",
        )
    if metrics.crossover_reached and metrics.crossover_date is not None:
        ax.axvline(
            metrics.crossover_date.year,
            color="black",
            linestyle="--",
            linewidth=DEFAULT_LINEWIDTH_THICK,
            alpha=0.7,
            label=f"Crossover ({metrics.crossover_date:%b %Y})",
        )

    ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    ax.set_xlabel("Year", fontsize=10)
    ax.set_ylabel("Per month", fontsize=10)
    ax.set_title(title, fontsize=11, fontweight="bold")
    ax.grid(True, alpha=0.3, axis="y")
    if series:
        ax.legend(loc="upper left", fontsize=8, framealpha=0.9)
    _finish(fig, save_path)
    return fig, ax


# ---------------------------------------------------------------------------
# Allocation
# ---------------------------------------------------------------------------

def plot_allocation(
    slices: Sequence[AllocationSlice],
    *,
    ax: Optional[Axes] = None,
    figsize=(8, 8),
    title: str = "Asset Allocation",
    save_path: Optional[str] = None,
):
    """Pie chart of the latest asset mix (positive categories only)."""
    fig, ax = _new_axes(ax, figsize)
    if slices:
        ax.pie(
            [s.value for s in slices],
            labels=[s.label for s in slices],
            colors=[s.color for s in slices],
            autopct="%1.1f%%",
            startangle=90,
            wedgeprops={"edgecolor": "white", "linewidth": 1},
        )
        ax.axis("equal")
    else:
        ax.text(0.5, 0.5, "No assets", ha="center", va="center", transform=ax.transAxes)
        ax.set_axis_off()
    ax.set_title(title, fontsize=11, fontweight="bold")
    _finish(fig, save_path)
    return fig, ax


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def plot_report(
    report: PortfolioReport,
    *,
    figsize=DEFAULT_FIGSIZE,
    save_path: Optional[str] = None,
):
    """2x2 dashboard of a PortfolioReport. Returns ``(fig, axes)``."""
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    fig.subplots_adjust(hspace=0.45, wspace=0.3)

    plot_net_worth(report.aggregates, ax=axes[0, 0])
    plot_drawdown(report.drawdown, ax=axes[0, 1])
    if report.compound is not None:
        plot_projection(report.compound, ax=axes[1, 0])
    else:
        axes[1, 0].set_axis_off()
    plot_allocation(report.allocation, ax=axes[1, 1])

    _finish(fig, save_path)
    return fig, axes
