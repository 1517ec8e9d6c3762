"""Entry submission workflow.

One SubmissionController owns the application state: the in-memory ledger,
the entry form and the submitting flag. Submitting moves the controller
from idle to submitting and back; while a submission is in flight further
submits are ignored.

Store calls run in a worker thread so the event loop stays free while a
request is pending.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable

from spendlog.config import AppConfig
from spendlog.dates import local_timestamp
from spendlog.domain.metrics import (
    DailySummary,
    WalletBalance,
    compute_daily_summary,
    compute_wallet_balance,
    entries_on,
    resolve_wallet_start_date,
)
from spendlog.domain.models import Category, Entry, Money, to_money
from spendlog.errors import RemoteError, ValidationError
from spendlog.settings import get_wallet_start_date, set_wallet_start_date
from spendlog.store.ledger import LedgerStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusMessage:
    """Transient message for the user."""

    text: str
    ok: bool


@dataclass
class AppState:
    """Everything the controller mutates."""

    ledger: list[Entry] = field(default_factory=list)
    version: str | None = None
    loaded: bool = False
    amount: str = ""
    category: Category | None = None
    note: str = ""
    submitting: bool = False
    status: StatusMessage | None = None


@dataclass(frozen=True)
class Dashboard:
    """Derived numbers shown after every load or submission."""

    daily: DailySummary
    wallet: WalletBalance
    today_entries: list[Entry]


def parse_amount_input(text: str) -> Money:
    """Validate an amount typed by the user.

    Args:
        text: Amount such as "12", "12.5" or "12.50".

    Returns:
        The amount as Money.

    Raises:
        ValidationError: If the amount is not a positive number with at most
            two decimal places.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {text!r}") from e
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be positive")
    try:
        money = to_money(value)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {text!r}") from e
    if money != value:
        raise ValidationError("Amount can have at most two decimal places")
    return money


def clean_note(note: str) -> str:
    """Trim a note and fold line breaks so the row stays on one line."""
    return re.sub(r"\s*[\r\n]+\s*", " ", note.strip())


class SubmissionController:
    """Single owner of the ledger, the form and the submission state."""

    def __init__(
        self,
        store: LedgerStore,
        config: AppConfig,
        settings_path: Path | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.config = config
        self.settings_path = settings_path
        self.clock = clock
        self.state = AppState()
        self._wallet_start: date | None = None

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.now().date()

    async def load(self) -> bool:
        """Fetch the ledger into memory.

        Returns:
            True if the ledger was loaded. On failure the status holds the
            reason and the in-memory ledger is not trusted.
        """
        try:
            entries, version = await asyncio.to_thread(self.store.fetch_ledger)
        except RemoteError as e:
            logger.warning("Failed to load ledger: %s", e)
            self.state.loaded = False
            self.state.status = StatusMessage(f"Failed to load ledger: {e}", ok=False)
            return False

        self.state.ledger = entries
        self.state.version = version
        self.state.loaded = True
        return True

    def set_amount(self, text: str) -> None:
        self.state.amount = text

    def select_category(self, tag: str) -> None:
        """Select a category by tag.

        Raises:
            ValidationError: If the tag is not a known category.
        """
        category = Category.parse(tag)
        if category is None:
            raise ValidationError(f"Unknown category: {tag!r}")
        self.state.category = category

    def set_note(self, note: str) -> None:
        self.state.note = note

    def reset_form(self) -> None:
        self.state.amount = ""
        self.state.category = None
        self.state.note = ""

    def validate(self) -> tuple[Money, Category]:
        """Check the form can be submitted.

        Returns:
            Tuple of (amount, category).

        Raises:
            ValidationError: If the amount or the category is missing or invalid.
        """
        amount = parse_amount_input(self.state.amount)
        if self.state.category is None:
            raise ValidationError("Pick a category")
        return amount, self.state.category

    def can_submit(self) -> bool:
        if self.state.submitting:
            return False
        try:
            self.validate()
        except ValidationError:
            return False
        return True

    async def submit(self) -> bool:
        """Append the form as a new entry to the remote ledger.

        Returns:
            True if the entry was written. False if a submission was already
            in flight, the form was invalid or the write failed; the status
            says which.
        """
        if self.state.submitting:
            logger.debug("Submission already in flight, ignoring")
            return False

        try:
            amount, category = self.validate()
        except ValidationError as e:
            self.state.status = StatusMessage(str(e), ok=False)
            return False

        self.state.submitting = True
        entry = Entry(
            timestamp=local_timestamp(self.now()),
            amount=amount,
            category=category.value,
            note=clean_note(self.state.note),
        )
        try:
            _, version = await asyncio.to_thread(self.store.fetch_ledger)
            new_version = await asyncio.to_thread(self.store.append_entry, entry, version)
        except RemoteError as e:
            logger.warning("Submit failed: %s", e)
            self.state.status = StatusMessage(f"Failed: {e}", ok=False)
            return False
        finally:
            self.state.submitting = False

        self.state.ledger.append(entry)
        self.state.version = new_version
        self.reset_form()
        self.state.status = StatusMessage(f"${amount:.2f} {category.value} logged", ok=True)
        return True

    def wallet_start_date(self) -> date:
        """Resolve the wallet start date once and persist it.

        Before the ledger has loaded the date is resolved but neither cached
        nor saved, so an empty in-memory ledger never pins it to today.
        """
        if self._wallet_start is not None:
            return self._wallet_start

        stored = get_wallet_start_date(self.settings_path)
        resolved = resolve_wallet_start_date(stored, self.state.ledger, self.today())
        if stored is None and not self.state.loaded:
            return resolved
        if stored is None:
            set_wallet_start_date(resolved, self.settings_path)
            logger.info("Wallet start date set to %s", resolved)
        self._wallet_start = resolved
        return resolved

    def change_wallet_start_date(self, start: date) -> None:
        """Override the wallet start date."""
        set_wallet_start_date(start, self.settings_path)
        self._wallet_start = start

    def dashboard(self) -> Dashboard:
        """Recompute the derived metrics from the in-memory ledger."""
        today = self.today()
        ledger = self.state.ledger
        target = self.config.daily_target
        discretionary = self.config.discretionary
        return Dashboard(
            daily=compute_daily_summary(ledger, today, target, discretionary),
            wallet=compute_wallet_balance(ledger, today, self.wallet_start_date(), target, discretionary),
            today_entries=list(reversed(entries_on(ledger, today))),
        )
