"""
Unit tests for estimation.py module.

Tests the implied monthly contribution decomposition.
"""

from datetime import date

import pytest

from networth.constants import DAYS_PER_MONTH
from networth.estimation import (
    estimate_monthly_contribution,
    implied_contributions,
    monthly_rate,
)
from networth.ledger import Column, Record


@pytest.fixture
def single():
    return [Column("a", "Brokerage", "equity")]


class TestMonthlyRate:
    def test_rate(self):
        assert monthly_rate(12.0) == pytest.approx(0.01)
        assert monthly_rate(0.0) == 0.0
        assert monthly_rate(-6.0) == pytest.approx(-0.005)


class TestEstimate:
    """Test the contribution estimate over trailing pairs."""

    def test_fewer_than_two_records(self, single):
        assert estimate_monthly_contribution([], single, 7.0) == 0.0
        one = [Record(date(2024, 1, 1), {"a": 1_000})]
        assert estimate_monthly_contribution(one, single, 7.0) == 0.0

    def test_pure_growth_implies_zero(self, single):
        """A change fully explained by 12% growth leaves no contribution."""
        start, end = date(2024, 1, 1), date(2024, 2, 1)
        months = (end - start).days / DAYS_PER_MONTH
        end_value = 100_000 * (1 + 0.01 * months)
        recs = [Record(start, {"a": 100_000}), Record(end, {"a": end_value})]

        pairs = implied_contributions(recs, single, 12.0)
        assert len(pairs) == 1
        assert pairs[0].market_growth == pytest.approx(100_000 * 0.01 * months)
        assert estimate_monthly_contribution(recs, single, 12.0) == pytest.approx(0.0, abs=1e-6)

    def test_matches_formula(self, single):
        start, end = date(2024, 1, 1), date(2024, 4, 1)
        recs = [Record(start, {"a": 50_000}), Record(end, {"a": 56_000})]
        m = (end - start).days / DAYS_PER_MONTH
        expected = (56_000 - 50_000 - 50_000 * monthly_rate(7.0) * m) / m
        assert estimate_monthly_contribution(recs, single, 7.0) == pytest.approx(expected)

    def test_close_pairs_skipped(self, single):
        """Records 9 days apart (~0.3 months) are not a usable pair."""
        recs = [Record(date(2024, 1, 1), {"a": 100_000}), Record(date(2024, 1, 10), {"a": 150_000})]
        assert implied_contributions(recs, single, 7.0) == []
        assert estimate_monthly_contribution(recs, single, 7.0) == 0.0

    def test_close_pair_does_not_poison_mean(self, single):
        recs = [
            Record(date(2024, 1, 1), {"a": 10_000}),
            Record(date(2024, 3, 1), {"a": 12_000}),
            Record(date(2024, 3, 5), {"a": 90_000}),
        ]
        pairs = implied_contributions(recs, single, 0.0)
        assert len(pairs) == 1
        assert pairs[0].end == date(2024, 3, 1)

    def test_negative_contribution(self, single):
        recs = [Record(date(2024, 1, 1), {"a": 100_000}), Record(date(2024, 3, 1), {"a": 90_000})]
        assert estimate_monthly_contribution(recs, single, 0.0) < 0

    def test_window_limits_pairs(self, columns, monthly_records):
        """Only the trailing window of records contributes pairs."""
        pairs = implied_contributions(monthly_records, columns, 0.0)
        assert len(pairs) == 11
        assert pairs[0].start == date(2023, 7, 1)

        last_two = implied_contributions(monthly_records, columns, 0.0, window=2)
        assert len(last_two) == 1
        assert last_two[0].end == date(2024, 6, 1)

    def test_window_excludes_drawdown_month(self, columns, monthly_records):
        """The Jun 2023 drop sits outside the default window."""
        estimate = estimate_monthly_contribution(monthly_records, columns, 0.0)
        assert estimate > 0
        full = estimate_monthly_contribution(monthly_records, columns, 0.0, window=18)
        assert full < estimate
