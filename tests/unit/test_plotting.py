"""
Unit tests for plotting.py module.

Tests that each chart draws without error, returns (fig, ax), honours an
existing axes and writes files when asked.
"""

import pytest
from datetime import date

# Use non-interactive backend for testing
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from networth.config import AnalysisConfig
from networth.engine import analyze
from networth.ledger import Ledger
from networth.plotting import (
    plot_allocation,
    plot_drawdown,
    plot_net_worth,
    plot_projection,
    plot_report,
)
from networth.projection import project


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def report(ledger):
    return analyze(ledger, AnalysisConfig(as_of=date(2024, 6, 1), horizon_months=240))


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


# ============================================================================
# TESTS
# ============================================================================

class TestCharts:
    """Test individual charts."""

    def test_net_worth(self, report):
        fig, ax = plot_net_worth(report.aggregates)
        assert ax.get_title() == "Net Worth by Category"
        assert len(ax.get_xticklabels()) == 18

    def test_net_worth_empty(self):
        fig, ax = plot_net_worth([])
        assert fig is not None

    def test_drawdown(self, report):
        fig, ax = plot_drawdown(report.drawdown)
        low, high = ax.get_ylim()
        assert high == 0.0
        assert low < -10_000 / 76_000

    def test_projection_marks_crossover(self, report):
        fig, ax = plot_projection(report.compound)
        labels = ax.get_legend_handles_labels()[1]
        assert "Contribution" in labels
        assert any(label.startswith("Crossover") for label in labels) == report.compound.crossover_reached

    def test_projection_not_reached(self):
        metrics = project(0.0, 1_000, 0.0, date(2025, 1, 1), horizon_months=36, as_of=date(2025, 1, 1))
        fig, ax = plot_projection(metrics)
        labels = ax.get_legend_handles_labels()[1]
        assert not any(label.startswith("Crossover") for label in labels)

    def test_allocation(self, report):
        fig, ax = plot_allocation(report.allocation)
        assert ax.get_title() == "Asset Allocation"

    def test_allocation_empty(self):
        fig, ax = plot_allocation([])
        assert any(t.get_text() == "No assets" for t in ax.texts)

    def test_existing_axes(self, report):
        fig, ax = plt.subplots()
        fig2, ax2 = plot_drawdown(report.drawdown, ax=ax)
        assert fig2 is fig
        assert ax2 is ax


class TestDashboard:
    """Test the combined dashboard and file output."""

    def test_report_grid(self, report):
        fig, axes = plot_report(report)
        assert axes.shape == (2, 2)

    def test_empty_report(self):
        fig, axes = plot_report(analyze(Ledger.empty()))
        assert fig is not None

    def test_save(self, report, tmp_path):
        path = tmp_path / "dashboard.png"
        plot_report(report, save_path=str(path))
        assert path.exists()
        assert path.stat().st_size > 0
