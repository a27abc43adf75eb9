"""
Unit tests for ledger.py and categories.py.

Tests Column/Record construction, the immutable Ledger collection and the
duplicate-date conflict policies.
"""

from datetime import date

import pytest

from networth.categories import Category, category_info, parse_category
from networth.exceptions import ConfigurationError, DateConflictError, ValidationError
from networth.ledger import Column, Ledger, Record


class TestCategories:
    """Test category enumeration and metadata."""

    def test_five_categories(self):
        assert {c.value for c in Category} == {
            "equity", "fixed_income", "cash", "liability", "other"
        }

    def test_labels_and_colors(self):
        assert Category.CASH.label == "Cash / Liquid"
        assert Category.LIABILITY.color == "#ef4444"
        assert category_info("other").keywords == ()

    def test_parse_category_alias(self):
        """The short 'fixed' alias maps to FIXED_INCOME."""
        assert parse_category("fixed") is Category.FIXED_INCOME
        assert parse_category(" Equity ") is Category.EQUITY

    def test_parse_category_unknown(self):
        with pytest.raises(ValueError, match="Unknown category"):
            parse_category("crypto")


class TestColumnRecord:
    """Test Column and Record value objects."""

    def test_column_coerces_category(self):
        col = Column("a", "Brokerage", "equity")
        assert col.category is Category.EQUITY
        assert col.is_custom is False

    def test_record_missing_value_is_zero(self):
        rec = Record(date(2024, 1, 1), {"a": 5})
        assert rec.get("a") == 5.0
        assert rec.get("missing") == 0.0

    def test_record_values_read_only(self):
        source = {"a": 1.0}
        rec = Record(date(2024, 1, 1), source)
        source["a"] = 99.0
        assert rec.get("a") == 1.0
        with pytest.raises(TypeError):
            rec.values["a"] = 2.0


class TestLedger:
    """Test Ledger construction and mutation."""

    def test_records_sorted(self, columns):
        recs = [Record(date(2024, 3, 1)), Record(date(2024, 1, 1)), Record(date(2024, 2, 1))]
        ledger = Ledger(columns, recs)
        assert [r.date.month for r in ledger.records] == [1, 2, 3]

    def test_duplicate_column_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate column id"):
            Ledger([Column("a", "One"), Column("a", "Two")])

    def test_empty(self):
        ledger = Ledger.empty()
        assert len(ledger) == 0
        assert not ledger

    def test_upsert_inserts_in_order(self, ledger):
        new = Record(date(2022, 12, 1), {"col_eq": 1.0})
        updated = ledger.upsert(new)
        assert len(updated) == len(ledger) + 1
        assert updated.records[0] is new
        # original snapshot unchanged
        assert ledger.record_for(date(2022, 12, 1)) is None

    def test_dates_track_records(self, ledger):
        """The date index follows each new snapshot and lookups use it."""
        assert ledger.dates == tuple(r.date for r in ledger.records)
        assert ledger.record_for(date(2023, 6, 15)) is None

        mid = Record(date(2023, 6, 15), {"col_cash": 9.0})
        updated = ledger.upsert(mid)
        assert list(updated.dates) == sorted(updated.dates)
        assert date(2023, 6, 15) in updated.dates
        assert updated.record_for(date(2023, 6, 15)) is mid
        assert updated.record_for(date(2023, 6, 1)) is updated.records[5]
        assert date(2023, 6, 15) not in ledger.dates

        widened, _ = updated.add_column("Gold", "other")
        assert widened.dates == updated.dates

    def test_upsert_reject(self, ledger):
        clash = Record(date(2023, 1, 1), {"col_eq": 1.0})
        with pytest.raises(DateConflictError) as exc:
            ledger.upsert(clash, on_conflict="reject")
        assert exc.value.conflict_date == date(2023, 1, 1)

    def test_upsert_overwrite(self, ledger):
        clash = Record(date(2023, 1, 1), {"col_eq": 1.0})
        updated = ledger.upsert(clash, on_conflict="overwrite")
        rec = updated.record_for(date(2023, 1, 1))
        assert rec.get("col_eq") == 1.0
        assert rec.get("col_cash") == 0.0
        assert len(updated) == len(ledger)

    def test_upsert_merge(self, ledger):
        clash = Record(date(2023, 1, 1), {"col_eq": 1.0})
        updated = ledger.upsert(clash, on_conflict="merge")
        rec = updated.record_for(date(2023, 1, 1))
        assert rec.get("col_eq") == 1.0
        assert rec.get("col_cash") == 5_000.0

    def test_upsert_unknown_policy(self, ledger):
        with pytest.raises(ConfigurationError, match="on_conflict"):
            ledger.upsert(Record(date(2030, 1, 1)), on_conflict="ask")

    def test_constructor_resolves_duplicates(self, columns):
        recs = [
            Record(date(2024, 1, 1), {"col_eq": 1.0, "col_cash": 2.0}),
            Record(date(2024, 1, 1), {"col_eq": 3.0}),
        ]
        assert Ledger(columns, recs).records[0].get("col_cash") == 0.0
        merged = Ledger(columns, recs, on_conflict="merge").records[0]
        assert merged.get("col_eq") == 3.0
        assert merged.get("col_cash") == 2.0
        with pytest.raises(DateConflictError):
            Ledger(columns, recs, on_conflict="reject")

    def test_add_column(self, ledger):
        updated, col = ledger.add_column("Gold Coins", "other")
        assert col.id == "col_custom_1"
        assert col.is_custom is True
        assert updated.column("col_custom_1").name == "Gold Coins"
        assert len(ledger.columns) == 5

        again, second = updated.add_column("Crypto", Category.EQUITY)
        assert second.id == "col_custom_2"

    def test_add_column_requires_name(self, ledger):
        with pytest.raises(ValidationError):
            ledger.add_column("  ", "other")

    def test_set_category(self, ledger):
        updated = ledger.set_category("col_car", "equity")
        assert updated.column("col_car").category is Category.EQUITY
        assert ledger.column("col_car").category is Category.OTHER

    def test_set_category_unknown_column(self, ledger):
        with pytest.raises(ValidationError, match="Unknown column"):
            ledger.set_category("nope", "equity")
