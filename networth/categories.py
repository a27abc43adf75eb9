"""Account categories for networth.

Closed enumeration of account classes with display metadata. Each Column in
a ledger belongs to exactly one Category; the calculator only needs the enum
value, while charts and the import classifier use the label, color and
keyword list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

__all__ = [
    "Category",
    "CategoryInfo",
    "CATEGORY_INFO",
    "ASSET_CATEGORIES",
    "CLASSIFICATION_ORDER",
    "category_info",
    "parse_category",
]


class Category(str, Enum):
    EQUITY = "equity"
    FIXED_INCOME = "fixed_income"
    CASH = "cash"
    LIABILITY = "liability"
    OTHER = "other"

    @property
    def label(self) -> str:
        return CATEGORY_INFO[self].label

    @property
    def color(self) -> str:
        return CATEGORY_INFO[self].color


@dataclass(frozen=True)
class CategoryInfo:
    label: str
    color: str
    keywords: Tuple[str, ...] = ()


CATEGORY_INFO: Dict[Category, CategoryInfo] = {
    Category.EQUITY: CategoryInfo(
        label="Equity",
        color="#8b5cf6",
        keywords=(
            "fidelity", "robinhood", "stock", "broker", "uhc", "fund", "etf",
            "invest", "401", "403", "contribution", "ira", "roth", "schwab",
            "vanguard",
        ),
    ),
    Category.FIXED_INCOME: CategoryInfo(
        label="Fixed Income",
        color="#3b82f6",
        keywords=(
            "certificate", "bond", "treasury", "cd", "deposit", "stanford",
            "plazo", "fixed",
        ),
    ),
    Category.LIABILITY: CategoryInfo(
        label="Liability",
        color="#ef4444",
        keywords=(
            "card", "debt", "loan", "mortgage", "hipoteca", "credit", "amex",
            "visa", "mastercard", "liab",
        ),
    ),
    Category.CASH: CategoryInfo(
        label="Cash / Liquid",
        color="#10b981",
        keywords=(
            "checking", "paypal", "marcus", "cash", "bank", "sbu", "ahorro",
            "savings", "cuenta", "hysa", "sfcu",
        ),
    ),
    Category.OTHER: CategoryInfo(label="Other Assets", color="#f59e0b"),
}

# Categories that count towards total assets, in display order.
ASSET_CATEGORIES: Tuple[Category, ...] = (
    Category.EQUITY,
    Category.FIXED_INCOME,
    Category.CASH,
    Category.OTHER,
)

# Keyword matching priority used by the import classifier; OTHER is the fallback.
CLASSIFICATION_ORDER: Tuple[Category, ...] = (
    Category.EQUITY,
    Category.FIXED_INCOME,
    Category.LIABILITY,
    Category.CASH,
)


def category_info(category: Category | str) -> CategoryInfo:
    """Return display metadata for *category* (enum member or value)."""
    return CATEGORY_INFO[parse_category(category)]


def parse_category(value: Category | str) -> Category:
    """Coerce a category value, accepting the short alias ``"fixed"``."""
    if isinstance(value, Category):
        return value
    key = str(value).strip().lower()
    if key == "fixed":
        key = Category.FIXED_INCOME.value
    try:
        return Category(key)
    except ValueError:
        valid = ", ".join(c.value for c in Category)
        raise ValueError(f"Unknown category '{value}'. Expected one of: {valid}.") from None
