"""
Pytest configuration and fixtures for the networth test suite.

Fixtures build small, hand-checkable ledgers: five accounts (one per
category) and a monthly history with a single drawdown episode.
"""

from datetime import date
from typing import List

import pytest

from networth.categories import Category
from networth.ledger import Column, Ledger, Record


# ---------------------------------------------------------------------------
# Column Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def columns() -> List[Column]:
    """One account per category."""
    return [
        Column("col_eq", "Vanguard Brokerage", Category.EQUITY),
        Column("col_fi", "Treasury Bond", Category.FIXED_INCOME),
        Column("col_cash", "Chase Checking", Category.CASH),
        Column("col_card", "Amex Card", Category.LIABILITY),
        Column("col_car", "Car", Category.OTHER),
    ]


# ---------------------------------------------------------------------------
# Record Fixtures
# ---------------------------------------------------------------------------

def make_record(d: date, equity: float, *, fixed=10_000.0, cash=5_000.0, card=1_000.0, car=8_000.0) -> Record:
    return Record(
        d,
        {
            "col_eq": equity,
            "col_fi": fixed,
            "col_cash": cash,
            "col_card": card,
            "col_car": car,
        },
    )


@pytest.fixture
def monthly_records() -> List[Record]:
    """
    Eighteen month-start snapshots, Jan 2023 to Jun 2024.

    Equity grows by 1,000/month except a 10,000 drop in Jun 2023.
    Non-equity accounts net to 22,000 (10k + 5k + 8k - 1k).
    """
    records = []
    equity = 50_000.0
    for i in range(18):
        year, month = 2023 + (i // 12), i % 12 + 1
        if i == 5:
            equity -= 10_000.0
        elif i > 0:
            equity += 1_000.0
        records.append(make_record(date(year, month, 1), equity))
    return records


@pytest.fixture
def ledger(columns, monthly_records) -> Ledger:
    return Ledger(columns, monthly_records)


# ---------------------------------------------------------------------------
# CSV Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def csv_text() -> str:
    """Spreadsheet export with currency formatting and a Total column."""
    return (
        'Year,Month,Fidelity 401k,Chase Checking,"Amex Card",Treasury Bond,Total\n'
        '2024,1/31,"$50,000","$4,000","(1,000)","$10,000","$63,000"\n'
        '2024,2/29,"$51,500","$4,200","$ -","$10,000","$65,700"\n'
        '2024,3,"$52,000",null,"1,500","$10,050","$60,550"\n'
        '2024,45413,"$53,000","$4,100","1,200","$10,100","$66,000"\n'
    )


@pytest.fixture
def csv_file(tmp_path, csv_text):
    path = tmp_path / "balances.csv"
    path.write_text(csv_text)
    return path
