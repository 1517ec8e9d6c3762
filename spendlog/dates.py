"""Date utilities for spendlog.

Ledger timestamps are local wall-clock times with their UTC offset, so the
calendar day of an entry is simply the date part of its timestamp.
"""

from datetime import date, datetime

import pandas as pd

START_DATE_FORMAT = "%Y-%m-%d"


def local_timestamp(now: datetime | None = None) -> str:
    """Format a moment as a local ISO-8601 timestamp with its UTC offset.

    Args:
        now: Moment to format. Naive datetimes are taken as local time;
            aware ones keep their offset. Defaults to the current time.

    Returns:
        Timestamp such as ``2025-01-15T08:30:00-05:00``.
    """
    if now is None:
        now = datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()
    return now.isoformat(timespec="seconds")


def entry_date(timestamp: str) -> date | None:
    """Get the calendar day of a ledger timestamp.

    Args:
        timestamp: ISO-8601 timestamp from the ledger.

    Returns:
        The date part, or None if the timestamp does not start with a date.
    """
    try:
        return date.fromisoformat(timestamp[:10])
    except ValueError:
        return None


def parse_start_date(value: str) -> date:
    """Parse a stored wallet start date.

    Args:
        value: Date in YYYY-MM-DD format.

    Returns:
        Parsed date.

    Raises:
        ValueError: If the value is not a valid YYYY-MM-DD date.
    """
    return datetime.strptime(value.strip(), START_DATE_FORMAT).date()


def normalize_date_input(raw: str) -> date:
    """Parse a date typed by the user.

    YYYY-MM-DD is read as is. Anything else goes through the day-first
    parse used for bank exports (DD/MM/YYYY, DD-MM-YYYY, ...).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    try:
        return parse_start_date(raw)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(raw.strip(), dayfirst=True)
    except (ValueError, TypeError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw}'")
    return parsed.date()


def format_entry_time(timestamp: str) -> str:
    """Clock time of a ledger timestamp, e.g. '8:05 PM', or '' if unparseable."""
    try:
        return datetime.fromisoformat(timestamp).strftime("%I:%M %p").lstrip("0")
    except ValueError:
        return ""


def format_day_label(day: date) -> str:
    """Human-readable day, e.g. 'Wednesday, January 15'."""
    return day.strftime("%A, %B %d").replace(" 0", " ")
