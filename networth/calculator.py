"""Net-worth calculator.

Reduces one Record into category totals, total assets, liquidity and net
worth. Every other component builds on this.

Sign convention
---------------
Liability columns store magnitudes and always reduce net worth by
``abs(value)``; every other category adds its value signed, with no
clamping. Missing values count as 0.

    total_assets = equity + fixed_income + cash + other
    net_worth    = total_assets - liability
    liquidity    = cash + fixed_income
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

from .categories import Category
from .ledger import Column, Record

__all__ = [
    "CategoryTotals",
    "compute_totals",
    "net_worth",
]


@dataclass(frozen=True)
class CategoryTotals:
    """Per-category sums for one snapshot. ``liability`` is always >= 0."""

    equity: float = 0.0
    fixed_income: float = 0.0
    cash: float = 0.0
    liability: float = 0.0
    other: float = 0.0

    @property
    def total_assets(self) -> float:
        return self.equity + self.fixed_income + self.cash + self.other

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.liability

    @property
    def liquidity(self) -> float:
        return self.cash + self.fixed_income

    def get(self, category: Category) -> float:
        return getattr(self, Category(category).value)

    def as_dict(self) -> Dict[str, float]:
        return {c.value: self.get(c) for c in Category}


def compute_totals(record: Record, columns: Sequence[Column]) -> CategoryTotals:
    """Sum *record* values per category over *columns*."""
    sums = {c: 0.0 for c in Category}
    for col in columns:
        value = record.get(col.id)
        if col.category is Category.LIABILITY:
            sums[Category.LIABILITY] += abs(value)
        else:
            sums[col.category] += value
    return CategoryTotals(**{c.value: v for c, v in sums.items()})


def net_worth(record: Record, columns: Sequence[Column]) -> float:
    """Net worth of a single record (assets minus liability magnitudes)."""
    return compute_totals(record, columns).net_worth
