"""
Ledger data model for networth.

Purpose
-------
Defines the caller-held collections the analytics engine consumes:

- Column : one financial account (id, display name, category, custom flag)
- Record : one dated snapshot of account balances, keyed by Column.id
- Ledger : an immutable snapshot of columns + chronologically sorted records

The engine never mutates these objects. Every Ledger mutation returns a new
Ledger, so a report computed from one snapshot stays valid after the caller
adds a record or recategorizes an account.

Conflict policy
---------------
At most one Record exists per date. When a record is inserted for a date that
already exists, ``Ledger.upsert`` applies an explicit policy:

- "reject"    : raise DateConflictError, ledger unchanged
- "overwrite" : replace the existing record entirely
- "merge"     : combine value maps, incoming values win per column

Example
-------
>>> from datetime import date
>>> ledger = Ledger.empty()
>>> ledger, brokerage = ledger.add_column("Brokerage", Category.EQUITY)
>>> ledger = ledger.upsert(Record(date(2024, 1, 1), {brokerage.id: 10_000.0}))
>>> len(ledger)
1
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from types import MappingProxyType
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple

from .categories import Category, parse_category
from .exceptions import ConfigurationError, DateConflictError, ValidationError

__all__ = [
    "Column",
    "Record",
    "Ledger",
    "ConflictPolicy",
    "CONFLICT_POLICIES",
]

logger = logging.getLogger(__name__)

ConflictPolicy = Literal["reject", "overwrite", "merge"]
CONFLICT_POLICIES: Tuple[str, ...] = ("reject", "overwrite", "merge")


# ---------------------------------------------------------------------------
# Column / Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Column:
    """
    One financial account tracked across snapshots.

    Parameters
    ----------
    id : str
        Unique identifier, used as key in Record.values.
    name : str
        Display name (e.g. "Fidelity 401k").
    category : Category
        Account class. Liabilities store magnitudes; the sign convention is
        applied by the calculator.
    is_custom : bool, default False
        True for accounts created by explicit user action rather than import.
    """

    id: str
    name: str
    category: Category = Category.OTHER
    is_custom: bool = False

    def __post_init__(self):
        object.__setattr__(self, "category", parse_category(self.category))


@dataclass(frozen=True)
class Record:
    """
    Balances of every account at one reporting date.

    Missing column ids are read as 0 by the calculator. Values are copied into
    a read-only mapping so that a Record cannot change after it was aggregated.
    """

    date: date
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "values", MappingProxyType({k: float(v) for k, v in dict(self.values).items()})
        )

    def get(self, column_id: str) -> float:
        return self.values.get(column_id, 0.0)


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class Ledger:
    """
    Immutable snapshot of columns and date-sorted records.

    Parameters
    ----------
    columns : sequence of Column
        Account definitions. Ids must be unique.
    records : iterable of Record
        Snapshots in any order; they are sorted ascending by date. Duplicate
        dates are resolved with *on_conflict*.
    on_conflict : {"reject", "overwrite", "merge"}, default "overwrite"
        Policy applied to duplicate dates while building the ledger.
    """

    def __init__(
        self,
        columns: Sequence[Column] = (),
        records: Iterable[Record] = (),
        *,
        on_conflict: ConflictPolicy = "overwrite",
    ):
        cols = tuple(columns)
        seen = set()
        for col in cols:
            if col.id in seen:
                raise ValidationError(f"Duplicate column id '{col.id}'.")
            seen.add(col.id)
        self._columns: Tuple[Column, ...] = cols

        recs: List[Record] = []
        for rec in sorted(records, key=lambda r: r.date):
            if recs and recs[-1].date == rec.date:
                recs[-1] = _resolve_conflict(recs[-1], rec, on_conflict)
            else:
                recs.append(rec)
        self._records: Tuple[Record, ...] = tuple(recs)
        self._dates: Tuple[date, ...] = tuple(r.date for r in recs)

    @classmethod
    def empty(cls) -> "Ledger":
        return cls()

    # ------------------------------------------------------------------ views
    @property
    def columns(self) -> Tuple[Column, ...]:
        return self._columns

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def dates(self) -> Tuple[date, ...]:
        return self._dates

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records) or bool(self._columns)

    def __repr__(self) -> str:
        return f"Ledger(columns={len(self._columns)}, records={len(self._records)})"

    def column(self, column_id: str) -> Column:
        for col in self._columns:
            if col.id == column_id:
                return col
        raise ValidationError(f"Unknown column id '{column_id}'.")

    def record_for(self, on: date) -> Optional[Record]:
        """Return the record dated *on*, or None."""
        i = bisect.bisect_left(self._dates, on)
        if i < len(self._dates) and self._dates[i] == on:
            return self._records[i]
        return None

    # -------------------------------------------------------------- mutations
    def upsert(self, record: Record, on_conflict: ConflictPolicy = "reject") -> "Ledger":
        """
        Return a new ledger with *record* inserted in date order.

        Raises
        ------
        DateConflictError
            If a record for the same date exists and *on_conflict* is "reject".
        ConfigurationError
            If *on_conflict* is not a known policy.
        """
        _check_policy(on_conflict)
        existing = self.record_for(record.date)
        if existing is None:
            records = list(self._records) + [record]
        else:
            merged = _resolve_conflict(existing, record, on_conflict)
            records = [merged if r.date == record.date else r for r in self._records]
            logger.debug("Resolved date conflict on %s with policy %r", record.date, on_conflict)
        return Ledger(self._columns, records)

    def add_column(
        self,
        name: str,
        category: Category | str,
        *,
        column_id: Optional[str] = None,
    ) -> Tuple["Ledger", Column]:
        """
        Return a new ledger with a custom column appended, and the new column.

        The id defaults to ``col_custom_<n>`` with the first free *n*.
        """
        if not name or not name.strip():
            raise ValidationError("Column name must be non-empty.")
        if column_id is None:
            taken = {c.id for c in self._columns}
            n = 1
            while f"col_custom_{n}" in taken:
                n += 1
            column_id = f"col_custom_{n}"
        col = Column(id=column_id, name=name.strip(), category=parse_category(category), is_custom=True)
        return Ledger(self._columns + (col,), self._records), col

    def set_category(self, column_id: str, category: Category | str) -> "Ledger":
        """Return a new ledger with the category of *column_id* changed."""
        target = self.column(column_id)
        updated = replace(target, category=parse_category(category))
        columns = tuple(updated if c.id == column_id else c for c in self._columns)
        return Ledger(columns, self._records)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_policy(policy: str) -> None:
    if policy not in CONFLICT_POLICIES:
        raise ConfigurationError(
            f"on_conflict must be one of {', '.join(CONFLICT_POLICIES)}, got '{policy}'."
        )


def _resolve_conflict(existing: Record, incoming: Record, policy: str) -> Record:
    _check_policy(policy)
    if policy == "reject":
        raise DateConflictError(
            f"A record dated {incoming.date.isoformat()} already exists. "
            f"Use on_conflict='overwrite' or 'merge' to replace it.",
            conflict_date=incoming.date,
        )
    if policy == "overwrite":
        return incoming
    values: Dict[str, float] = dict(existing.values)
    values.update(incoming.values)
    return Record(incoming.date, values)
