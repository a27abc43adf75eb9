"""
Integration test for the full networth workflow.

Tests the complete pipeline from CSV import through ledger edits, analytics
and report export to verify all components work together correctly.
"""

import json
from datetime import date

import pytest

from networth import AnalysisConfig, Category, Record, analyze, read_csv, write_csv
from networth.serialization import save_report


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for the CSV to report workflow."""

    def test_csv_to_report(self, csv_file, tmp_path):
        """
        Import a spreadsheet export, analyze it and save the JSON report.
        """
        # 1. Import
        ledger = read_csv(csv_file)
        assert len(ledger) == 4

        # 2. Analyze
        cfg = AnalysisConfig(timeframe="quarter", as_of=date(2024, 5, 1), horizon_months=240)
        report = analyze(ledger, cfg)

        assert [a.display_label for a in report.aggregates] == ["Q1 '24", "Q2 '24"]
        assert report.latest.net_worth == 66_000
        # Feb 65,700 -> Mar 60,550 is the only decline
        assert report.risk.max_drawdown == pytest.approx((60_550 - 65_700) / 65_700)
        assert report.risk.ytd == 66_000 - 60_550
        assert report.compound.current_net_worth == 66_000

        # 3. Save
        out = tmp_path / "report.json"
        save_report(report, out)
        data = json.loads(out.read_text())
        assert data["risk"]["cagr_defined"] is True
        assert len(data["compound"]["projection_series"]) == 20

    def test_edit_then_reanalyze(self, csv_file, tmp_path):
        """
        Add an account and a new snapshot, then confirm analytics and the
        exported CSV pick both up.
        """
        ledger = read_csv(csv_file)
        ledger, gold = ledger.add_column("Gold Coins", Category.OTHER)

        snapshot = {c.id: ledger.records[-1].get(c.id) for c in ledger.columns}
        snapshot[gold.id] = 2_000.0
        ledger = ledger.upsert(Record(date(2024, 6, 1), snapshot))

        report = analyze(ledger, AnalysisConfig(as_of=date(2024, 6, 1)))
        assert report.latest.net_worth == 68_000
        assert report.trends.net_worth.absolute_delta == 2_000
        assert any(s.category is Category.OTHER for s in report.allocation)

        # Reclassifying the new account moves it into equity
        ledger = ledger.set_category(gold.id, Category.EQUITY)
        latest = analyze(ledger).latest
        assert latest.totals.other == 0.0
        assert latest.totals.equity == 55_000

        out = tmp_path / "edited.csv"
        write_csv(ledger, out)
        again = read_csv(out)
        assert len(again) == 5
        assert again.columns[-1].name == "Gold Coins"
