"""Domain types for spendlog.

- Money: Decimal amount in the ledger currency, always two decimal places
- Entry: one immutable row of the spending ledger
- Category: the closed set of spending categories
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Iterable, NewType

# Money amounts are Decimals quantized to cents to avoid floating point drift
Money = NewType("Money", Decimal)

CENT = Decimal("0.01")


def to_money(value: Decimal | int | str) -> Money:
    """Quantize a value to cents.

    Args:
        value: Decimal, int or numeric string.

    Returns:
        Money rounded half-up to two decimal places.
    """
    return Money(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


class Category(StrEnum):
    """Spending categories a new entry can be logged under."""

    GROCERIES = "GROCERIES"
    RESTAURANTS = "RESTAURANTS"
    SHOPPING = "SHOPPING"
    BOOKS_RECORDS = "BOOKS_RECORDS"
    TRAVEL = "TRAVEL"
    STIPEND = "STIPEND"
    RENT = "RENT"
    BILLS = "BILLS"
    HEALTH = "HEALTH"
    TRANSPORT = "TRANSPORT"
    GIFTS = "GIFTS"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, tag: str) -> "Category | None":
        """Look up a category by tag, case-insensitively.

        Returns:
            The matching Category, or None for an unknown tag.
        """
        try:
            return cls(tag.strip().upper())
        except ValueError:
            return None


DEFAULT_DISCRETIONARY: frozenset[Category] = frozenset(
    {
        Category.GROCERIES,
        Category.RESTAURANTS,
        Category.SHOPPING,
        Category.BOOKS_RECORDS,
        Category.TRAVEL,
        Category.STIPEND,
    }
)


def is_discretionary(tag: str, discretionary: Iterable[Category]) -> bool:
    """Check whether a ledger category tag counts against the budget.

    Unknown tags (e.g. from hand-edited rows) are never discretionary.
    """
    category = Category.parse(tag) if tag else None
    return category is not None and category in discretionary


@dataclass(frozen=True)
class Entry:
    """Immutable spending ledger entry."""

    timestamp: str
    amount: Money
    category: str
    note: str = ""
