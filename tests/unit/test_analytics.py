"""
Unit tests for analytics.py module.

Tests trend deltas, drawdown, CAGR, YTD, leverage ratios and allocation.
"""

from datetime import date

import numpy as np
import pytest

from networth.aggregation import aggregate
from networth.analytics import (
    allocation,
    compute_cagr,
    drawdown,
    drawdown_series,
    elapsed_years,
    leverage_ratios,
    max_drawdown,
    risk_summary,
    trend,
    trend_block,
    ytd_delta,
)
from networth.categories import Category
from networth.constants import DAYS_PER_YEAR
from networth.ledger import Column, Record


@pytest.fixture
def history(columns, monthly_records):
    return aggregate(monthly_records, columns, "month")


# ---------------------------------------------------------------------------
# Trend
# ---------------------------------------------------------------------------

class TestTrend:
    """Test last-two-point deltas."""

    def test_basic(self):
        t = trend([100.0, 110.0])
        assert t.value == 110.0
        assert t.absolute_delta == 10.0
        assert t.percent_delta == pytest.approx(0.10)

    def test_single_point_zero_baseline(self):
        t = trend([500.0])
        assert t.value == 500.0
        assert t.absolute_delta == 500.0
        assert t.percent_delta == 0.0

    def test_zero_previous(self):
        t = trend([0.0, 250.0])
        assert t.absolute_delta == 250.0
        assert t.percent_delta == 0.0

    def test_negative_previous_uses_magnitude(self):
        """Moving from -100 to -50 is an improvement."""
        assert trend([-100.0, -50.0]).percent_delta == pytest.approx(0.5)

    def test_empty(self):
        t = trend([])
        assert (t.value, t.absolute_delta, t.percent_delta) == (0.0, 0.0, 0.0)

    def test_trend_block(self, history):
        block = trend_block(history)
        assert block.net_worth.value == 78_000
        assert block.net_worth.absolute_delta == 1_000
        assert block.liability.absolute_delta == 0
        assert block.liquidity.value == 15_000


# ---------------------------------------------------------------------------
# Drawdown
# ---------------------------------------------------------------------------

class TestDrawdown:
    """Test drawdown against the running maximum."""

    def test_drawdown_non_positive_and_zero_at_peaks(self):
        values = [100.0, 120.0, 90.0, 130.0, 125.0]
        dd = drawdown(values)

        assert np.all(dd <= 0)
        assert dd[0] == 0.0
        assert dd[1] == 0.0
        assert dd[2] == pytest.approx(-0.25)
        assert dd[3] == 0.0
        assert dd[4] == pytest.approx(-5 / 130)

    def test_non_positive_running_max_is_zero(self):
        dd = drawdown([-500.0, -800.0, -200.0, 100.0, 50.0])
        assert list(dd[:4]) == [0.0, 0.0, 0.0, 0.0]
        assert dd[4] == pytest.approx(-0.5)
        assert np.all(np.isfinite(dd))

    def test_empty(self):
        assert drawdown([]).size == 0

    def test_series_on_fixture(self, history):
        points = drawdown_series(history)
        assert len(points) == len(history)
        # Jun 2023 drop from the 76,000 peak
        assert points[5].drawdown == pytest.approx(-10_000 / 76_000)
        assert points[5].display_label == "Jun '23"
        assert points[5].net_worth == 66_000
        # recovered to the old peak in Apr 2024
        assert points[15].drawdown == 0.0

    def test_max_drawdown(self, history):
        assert max_drawdown(history) == pytest.approx(-10_000 / 76_000)
        assert max_drawdown([]) == 0.0


# ---------------------------------------------------------------------------
# CAGR
# ---------------------------------------------------------------------------

class TestCAGR:
    """Test compound annual growth rate."""

    def test_two_years(self):
        start, end = date(2020, 1, 1), date(2022, 1, 1)
        years = (end - start).days / DAYS_PER_YEAR
        expected = (121.0 / 100.0) ** (1 / years) - 1
        assert compute_cagr(100.0, 121.0, start, end) == pytest.approx(expected)
        assert compute_cagr(100.0, 121.0, start, end) == pytest.approx(0.10, abs=1e-3)

    def test_short_span_floored_to_one_year(self):
        start, end = date(2024, 1, 1), date(2024, 4, 1)
        assert elapsed_years(start, end) == 1.0
        assert compute_cagr(100.0, 110.0, start, end) == pytest.approx(0.10)

    @pytest.mark.parametrize("start_value, end_value", [(0.0, 100.0), (-50.0, 100.0), (100.0, 0.0), (100.0, -5.0)])
    def test_non_positive_endpoint(self, start_value, end_value):
        assert compute_cagr(start_value, end_value, date(2020, 1, 1), date(2024, 1, 1)) == 0.0

    def test_risk_summary_flags_undefined(self, columns):
        cols = [Column("a", "Loan", Category.LIABILITY), Column("b", "Cash", Category.CASH)]
        recs = [
            Record(date(2022, 1, 1), {"a": 10_000, "b": 1_000}),
            Record(date(2024, 1, 1), {"a": 5_000, "b": 8_000}),
        ]
        summary = risk_summary(aggregate(recs, cols))
        assert summary.cagr == 0.0
        assert summary.cagr_defined is False

    def test_risk_summary_single_point(self, history):
        summary = risk_summary(history[:1])
        assert summary.cagr == 0.0
        assert summary.cagr_defined is False
        assert summary.max_drawdown == 0.0


# ---------------------------------------------------------------------------
# Risk summary / YTD
# ---------------------------------------------------------------------------

class TestRiskSummary:
    """Test combined statistics on the fixture history."""

    def test_summary(self, history):
        summary = risk_summary(history)

        years = (date(2024, 6, 1) - date(2023, 1, 1)).days / DAYS_PER_YEAR
        assert summary.years == pytest.approx(years)
        assert summary.cagr == pytest.approx((78_000 / 72_000) ** (1 / years) - 1)
        assert summary.cagr_defined is True
        assert summary.max_drawdown == pytest.approx(-10_000 / 76_000)
        # Jan 2024 = 73,000 -> Jun 2024 = 78,000
        assert summary.ytd == 5_000

    def test_ytd_from_separate_series(self, history):
        view = history[12:14]
        summary = risk_summary(history, ytd_aggregates=view)
        assert summary.ytd == view[-1].net_worth - view[0].net_worth

    def test_empty(self):
        summary = risk_summary([])
        assert summary.max_drawdown == 0.0
        assert summary.cagr_defined is False
        assert summary.ytd == 0.0

    def test_ytd_single_year(self, history):
        assert ytd_delta(history[:3]) == 2_000
        assert ytd_delta([]) == 0.0


# ---------------------------------------------------------------------------
# Ratios / allocation
# ---------------------------------------------------------------------------

class TestRatiosAllocation:
    """Test leverage ratios and allocation of the latest point."""

    def test_leverage(self, history):
        ratios = leverage_ratios(history[-1])
        # equity 56,000 + 10,000 + 5,000 + 8,000 = 79,000 assets, 1,000 debt
        assert ratios.debt_to_assets == pytest.approx(1_000 / 79_000)
        assert ratios.debt_to_equity == pytest.approx(1_000 / 78_000)

    def test_leverage_underwater(self):
        cols = [Column("a", "Loan", Category.LIABILITY), Column("b", "Cash", Category.CASH)]
        agg = aggregate([Record(date(2024, 1, 1), {"a": 5_000, "b": 1_000})], cols)[0]
        ratios = leverage_ratios(agg)
        assert ratios.debt_to_assets == pytest.approx(5.0)
        assert ratios.debt_to_equity == 0.0

    def test_allocation(self, history):
        slices = allocation(history[-1])
        assert [s.category for s in slices] == [
            Category.EQUITY, Category.FIXED_INCOME, Category.CASH, Category.OTHER
        ]
        assert sum(s.value for s in slices) == pytest.approx(history[-1].total_assets)
        assert slices[0].label == "Equity"

    def test_allocation_excludes_non_positive(self):
        cols = [Column("a", "Cash", Category.CASH), Column("b", "Fund", Category.EQUITY),
                Column("c", "Car", Category.OTHER)]
        agg = aggregate([Record(date(2024, 1, 1), {"a": -200, "b": 1_000, "c": 0})], cols)[0]
        assert [s.category for s in allocation(agg)] == [Category.EQUITY]
