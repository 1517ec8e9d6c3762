"""Pure functions for reading and writing the ledger CSV.

Decoding is deliberately lenient: a malformed row never aborts parsing.
Each field falls back to a default instead:
- timestamp, category, note: empty string when missing
- amount: the leading numeric part of the field, else 0

Encoding always writes two-decimal amounts and only quotes the note when
it contains a comma or a double quote.
"""

import re
from decimal import Decimal, InvalidOperation

from spendlog.domain.models import Entry, Money, to_money

HEADER = "timestamp,amount,category,note"
FIELDS = HEADER.split(",")

# Same prefix rule as a browser's parseFloat: "12.5abc" -> 12.5
_NUMERIC_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: str) -> Money:
    """Decode an amount field.

    Args:
        raw: Raw field text.

    Returns:
        The numeric value of the leading number in the field, or 0.
    """
    match = _NUMERIC_PREFIX.match(raw)
    if not match:
        return Money(Decimal(0))
    try:
        return Money(Decimal(match.group().strip()))
    except InvalidOperation:
        return Money(Decimal(0))


def split_row(line: str) -> list[str]:
    """Split one CSV line into fields.

    A double quote anywhere toggles quoted mode, in which commas are
    literal. Inside quoted mode ``""`` is one literal quote.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def parse_row(line: str) -> Entry:
    """Decode a single data line into an Entry, filling gaps with defaults."""
    fields = split_row(line)
    fields += [""] * (len(FIELDS) - len(fields))
    return Entry(
        timestamp=fields[0],
        amount=parse_amount(fields[1]),
        category=fields[2],
        note=fields[3],
    )


def parse(text: str) -> list[Entry]:
    """Parse ledger text into entries.

    The first line is the header and is always discarded. Blank lines are
    skipped.

    Args:
        text: Full ledger file content.

    Returns:
        Entries in file order. Empty for empty or header-only text.
    """
    lines = text.split("\n")[1:]
    entries: list[Entry] = []
    for line in lines:
        line = line.rstrip("\r")
        if not line.strip():
            continue
        entries.append(parse_row(line))
    return entries


def quote_note(note: str) -> str:
    """Quote a note only if it contains a comma or a double quote."""
    if "," in note or '"' in note:
        return '"' + note.replace('"', '""') + '"'
    return note


def serialize_row(entry: Entry) -> str:
    """Encode an entry as a CSV line (without the trailing newline).

    Args:
        entry: Entry to encode.

    Returns:
        ``timestamp,amount,category,note`` with a two-decimal amount.
    """
    amount = f"{to_money(entry.amount):.2f}"
    return ",".join([entry.timestamp, amount, entry.category, quote_note(entry.note)])
