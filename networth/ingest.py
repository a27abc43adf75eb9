"""
CSV ingestion and export for networth.

Purpose
-------
Turns a spreadsheet export (one row per reporting date, one column per
account) into a Ledger, and writes a Ledger back in the same layout. The
analytics engine only ever sees the resulting Column and Record objects.

Input layout
------------
    Year, Month, Fidelity 401k, Chase Checking, Amex Card, ..., Total
    2024, 1/31,  "$52,310",      "$4,200",       "(1,150)",  ..., ...

- ``Year`` and ``Month`` headers are required (case-insensitive).
- Headers containing "total" are ignored (subtotals are recomputed).
- The Month cell may be ``m/d``, a month number, or a spreadsheet serial
  date (numbers above 20000, days since 1899-12-30).
- Amounts are cleaned by ``clean_number``: currency symbols and thousands
  separators are stripped, ``(x)`` is negative, placeholders such as
  ``$ -`` or ``null`` read as 0.
- Each account is categorized by ``classify`` from its header.

Example
-------
>>> from networth.ingest import read_csv, write_csv
>>> ledger = read_csv("balances.csv")
>>> write_csv(ledger, "balances_clean.csv")
"""

from __future__ import annotations

import io
import logging
import math
import re
import warnings
from datetime import date, timedelta
from pathlib import Path
from typing import IO, List, Optional, Union

import pandas as pd

from .calculator import net_worth
from .categories import CATEGORY_INFO, CLASSIFICATION_ORDER, Category
from .config import IngestConfig
from .constants import SERIAL_DATE_THRESHOLD
from .exceptions import IngestionError
from .ledger import Column, Ledger, Record

__all__ = [
    "classify",
    "clean_number",
    "resolve_date",
    "read_csv",
    "parse_csv_text",
    "ledger_to_frame",
    "write_csv",
]

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, IO[str]]

_PLACEHOLDERS = {"", "$ -", "-", "$-", "null"}
_NON_NUMERIC = re.compile(r"[^0-9.]")
_SERIAL_EPOCH = date(1899, 12, 30)


# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------

def classify(name: str) -> Category:
    """
    Category of an account from its name.

    Lowercase substring match against each category's keyword list, in the
    priority order equity, fixed income, liability, cash. Names matching
    nothing fall back to OTHER.

    Examples
    --------
    >>> classify("Vanguard Roth IRA")
    <Category.EQUITY: 'equity'>
    >>> classify("Chase Sapphire Card")
    <Category.LIABILITY: 'liability'>
    >>> classify("Car")
    <Category.OTHER: 'other'>
    """
    lower = name.lower()
    for category in CLASSIFICATION_ORDER:
        if any(k in lower for k in CATEGORY_INFO[category].keywords):
            return category
    return Category.OTHER


def clean_number(value) -> float:
    """
    Parse a spreadsheet amount.

    Examples
    --------
    >>> clean_number("$1,234.50")
    1234.5
    >>> clean_number("(250)")
    -250.0
    >>> clean_number("-$2,500")
    -2500.0
    >>> clean_number("$ -")
    0.0
    """
    if isinstance(value, (int, float)):
        return 0.0 if isinstance(value, float) and math.isnan(value) else float(value)
    if value is None:
        return 0.0
    text = str(value).strip()
    if text in _PLACEHOLDERS:
        return 0.0
    # accounting parentheses, or a leading minus (what write_csv emits)
    negative = (text.startswith("(") and text.endswith(")")) or text.lstrip("$ ").startswith("-")
    digits = _NON_NUMERIC.sub("", text)
    try:
        number = float(digits)
    except ValueError:
        return 0.0
    return -number if negative else number


def resolve_date(year_cell, month_cell) -> Optional[date]:
    """
    Date of a row from its Year and Month cells, or None when unresolvable.

    Examples
    --------
    >>> resolve_date("2024", "3/15")
    datetime.date(2024, 3, 15)
    >>> resolve_date("2024", "7")
    datetime.date(2024, 7, 1)
    >>> resolve_date("2024", "45366")
    datetime.date(2024, 3, 1)
    """
    try:
        year = int(float(str(year_cell).strip()))
    except (ValueError, OverflowError):
        return None
    month_text = str(month_cell).strip()
    if not year or not month_text:
        return None

    try:
        if "/" in month_text:
            month_part, day_part = (month_text.split("/") + [""])[:2]
            month = int(month_part)
            day = int(day_part) if day_part.strip().isdigit() and int(day_part) else 1
            return date(year, month, day)

        number = float(month_text)
        if number > SERIAL_DATE_THRESHOLD:
            serial = _SERIAL_EPOCH + timedelta(days=int(number))
            return date(year, serial.month, 1)
        return date(year, int(number), 1)
    except (ValueError, OverflowError):
        return None


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def read_csv(source: CsvSource, config: Optional[IngestConfig] = None) -> Ledger:
    """
    Load a ledger from a CSV file, path or text buffer.

    Parameters
    ----------
    source : str, Path or file-like
        CSV input.
    config : IngestConfig, optional
        Duplicate-date policy and subtotal handling.

    Returns
    -------
    Ledger
        Columns in header order, records sorted ascending by date.

    Raises
    ------
    IngestionError
        Empty file, missing Year/Month headers, or no row with a valid date.
    DateConflictError
        Two rows share a date and ``config.on_conflict`` is "reject".
    """
    config = config or IngestConfig()
    try:
        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise IngestionError("CSV input is empty.") from e
    frame = frame.fillna("")

    if frame.empty:
        raise IngestionError("CSV must contain a header row and at least one data row.")

    headers = [str(h).strip() for h in frame.columns]
    lowered = [h.lower() for h in headers]
    if "year" not in lowered or "month" not in lowered:
        raise IngestionError("CSV header must contain 'Year' and 'Month' columns.")
    year_idx = lowered.index("year")
    month_idx = lowered.index("month")

    columns: List[Column] = []
    positions: List[int] = []
    for idx, header in enumerate(headers):
        if idx in (year_idx, month_idx):
            continue
        if config.skip_total_columns and "total" in header.lower():
            continue
        name = header.replace("\r", " ").replace("\n", " ")
        columns.append(Column(id=f"col_{idx}", name=name, category=classify(name)))
        positions.append(idx)

    records: List[Record] = []
    skipped = 0
    for row in frame.itertuples(index=False, name=None):
        when = resolve_date(row[year_idx], row[month_idx])
        if when is None:
            skipped += 1
            continue
        values = {
            col.id: clean_number(row[pos]) if pos < len(row) else 0.0
            for col, pos in zip(columns, positions)
        }
        records.append(Record(when, values))

    if skipped:
        warnings.warn(
            f"Skipped {skipped} row(s) without a resolvable Year/Month date.",
            UserWarning,
            stacklevel=2,
        )
    if not records:
        raise IngestionError("No CSV row has a resolvable Year/Month date.")

    logger.debug("Imported %d columns and %d records", len(columns), len(records))
    return Ledger(columns, records, on_conflict=config.on_conflict)


def parse_csv_text(text: str, config: Optional[IngestConfig] = None) -> Ledger:
    """Load a ledger from CSV text."""
    return read_csv(io.StringIO(text), config)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def ledger_to_frame(ledger: Ledger) -> pd.DataFrame:
    """
    Spreadsheet layout of a ledger: Year, Month (``m/d``), one column per
    account, and Total (net worth).
    """
    header = ["Year", "Month"] + [c.name for c in ledger.columns] + ["Total"]
    rows = []
    for record in ledger.records:
        row = [record.date.year, f"{record.date.month}/{record.date.day}"]
        row += [record.get(c.id) for c in ledger.columns]
        row.append(net_worth(record, ledger.columns))
        rows.append(row)
    return pd.DataFrame(rows, columns=header)


def write_csv(ledger: Ledger, destination: CsvSource) -> None:
    """Write *ledger* in the import layout (round-trips through read_csv)."""
    ledger_to_frame(ledger).to_csv(destination, index=False)
