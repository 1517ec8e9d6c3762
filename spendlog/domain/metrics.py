"""Pure functions for the derived budget metrics.

This module contains the functional core for the dashboard numbers:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Only discretionary categories count against the daily target. The wallet
is a cumulative budget: it accrues the target once per day since the
wallet start date and is drawn down by every discretionary entry ever
logged.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_CEILING, Decimal
from enum import StrEnum
from typing import Iterable, Sequence

from spendlog.dates import entry_date
from spendlog.domain.models import Category, Entry, Money, is_discretionary

WARNING_RATIO = Decimal("0.75")


class DailyStatus(StrEnum):
    """How today's discretionary spending compares to the daily target."""

    NORMAL = "normal"
    WARNING = "warning"
    OVER = "over"


@dataclass(frozen=True)
class DailySummary:
    """Immutable daily discretionary spending summary."""

    day: date
    total: Money
    target: Money
    status: DailyStatus


@dataclass(frozen=True)
class WalletBalance:
    """Immutable wallet balance.

    ``days_to_recover`` and ``recovery_date`` are only set when the wallet
    is in deficit.
    """

    start_date: date
    days_elapsed: int
    allowance: Money
    spent: Money
    balance: Money
    low: bool
    days_to_recover: int | None = None
    recovery_date: date | None = None

    @property
    def in_deficit(self) -> bool:
        return self.balance < 0


def discretionary_entries(entries: Iterable[Entry], discretionary: Iterable[Category]) -> list[Entry]:
    """Filter entries down to discretionary categories."""
    allowed = frozenset(discretionary)
    return [e for e in entries if is_discretionary(e.category, allowed)]


def entries_on(entries: Iterable[Entry], day: date) -> list[Entry]:
    """Entries whose timestamp falls on the given calendar day, in ledger order."""
    return [e for e in entries if entry_date(e.timestamp) == day]


def sum_amounts(entries: Iterable[Entry]) -> Money:
    return Money(sum((e.amount for e in entries), Decimal(0)))


def daily_discretionary_total(
    entries: Iterable[Entry],
    today: date,
    discretionary: Iterable[Category],
) -> Money:
    """Sum today's discretionary spending.

    Args:
        entries: Full ledger.
        today: Day to total.
        discretionary: Categories that count against the budget.

    Returns:
        Total of discretionary entries dated exactly ``today``.
    """
    return sum_amounts(discretionary_entries(entries_on(entries, today), discretionary))


def classify_daily_total(total: Decimal, target: Decimal) -> DailyStatus:
    """Classify a daily total against the target.

    Over when above the target, warning when above 75% of it, else normal.
    """
    if total > target:
        return DailyStatus.OVER
    if total > target * WARNING_RATIO:
        return DailyStatus.WARNING
    return DailyStatus.NORMAL


def compute_daily_summary(
    entries: Iterable[Entry],
    today: date,
    target: Money,
    discretionary: Iterable[Category],
) -> DailySummary:
    """Compute today's total and its classification."""
    total = daily_discretionary_total(entries, today, discretionary)
    return DailySummary(day=today, total=total, target=target, status=classify_daily_total(total, target))


def days_elapsed(start_date: date, today: date) -> int:
    """Count days from start to today inclusive, never less than 1."""
    return max(1, (today - start_date).days + 1)


def compute_wallet_balance(
    entries: Iterable[Entry],
    today: date,
    start_date: date,
    target: Money,
    discretionary: Iterable[Category],
) -> WalletBalance:
    """Compute the cumulative wallet balance.

    Args:
        entries: Full ledger.
        today: Current day.
        start_date: First day the wallet accrued its allowance.
        target: Daily allowance.
        discretionary: Categories that count against the budget.

    Returns:
        WalletBalance. In deficit, includes how many days of zero spending
        it takes to get back to zero and the date that happens.
    """
    elapsed = days_elapsed(start_date, today)
    allowance = Money(target * elapsed)
    spent = sum_amounts(discretionary_entries(entries, discretionary))
    balance = Money(allowance - spent)

    if balance >= 0:
        return WalletBalance(
            start_date=start_date,
            days_elapsed=elapsed,
            allowance=allowance,
            spent=spent,
            balance=balance,
            low=balance < target,
        )

    days_to_recover = int((-balance / target).to_integral_value(rounding=ROUND_CEILING))
    return WalletBalance(
        start_date=start_date,
        days_elapsed=elapsed,
        allowance=allowance,
        spent=spent,
        balance=balance,
        low=True,
        days_to_recover=days_to_recover,
        recovery_date=today + timedelta(days=days_to_recover),
    )


def earliest_entry_date(entries: Sequence[Entry]) -> date | None:
    """Earliest calendar day in the ledger, ignoring unparseable timestamps."""
    days = [d for d in (entry_date(e.timestamp) for e in entries) if d is not None]
    return min(days) if days else None


def resolve_wallet_start_date(stored: date | None, entries: Sequence[Entry], today: date) -> date:
    """Pick the wallet start date.

    Args:
        stored: Explicitly persisted start date, if any.
        entries: Full ledger.
        today: Current day.

    Returns:
        The stored date, else the earliest entry's date, else today.
    """
    if stored is not None:
        return stored
    return earliest_entry_date(entries) or today
