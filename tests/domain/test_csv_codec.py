"""Tests for spendlog.domain.csv_codec pure functions."""

from decimal import Decimal

from spendlog.domain.csv_codec import HEADER, parse, parse_amount, serialize_row
from spendlog.domain.models import Entry, Money


def make_entry(note: str = "", amount: str = "12.50", category: str = "GROCERIES") -> Entry:
    return Entry(
        timestamp="2025-01-15T08:30:00-05:00",
        amount=Money(Decimal(amount)),
        category=category,
        note=note,
    )


def round_trip(entry: Entry) -> list[Entry]:
    return parse(HEADER + "\n" + serialize_row(entry) + "\n")


class TestParse:
    """Tests for parse."""

    def test_empty_text(self) -> None:
        """Should return no entries for empty text."""
        assert parse("") == []

    def test_header_only(self) -> None:
        """Should return no entries for a header-only ledger."""
        assert parse(HEADER) == []
        assert parse(HEADER + "\n") == []

    def test_parses_rows_in_order(self) -> None:
        """Should keep file order."""
        text = (
            f"{HEADER}\n"
            "2025-01-15T08:30:00-05:00,4.50,RESTAURANTS,coffee\n"
            "2025-01-14T19:00:00-05:00,60.00,GROCERIES,\n"
        )

        entries = parse(text)

        assert [e.category for e in entries] == ["RESTAURANTS", "GROCERIES"]
        assert entries[0].amount == Decimal("4.50")
        assert entries[0].note == "coffee"
        assert entries[1].note == ""

    def test_quoted_note_with_comma(self) -> None:
        """Should treat commas inside quotes as part of the field."""
        text = f'{HEADER}\n2025-01-15T08:30:00-05:00,9.99,SHOPPING,"socks, blue"\n'

        assert parse(text)[0].note == "socks, blue"

    def test_doubled_quote_decodes_to_one(self) -> None:
        """Should decode "" inside a quoted field to a single quote."""
        text = f'{HEADER}\n2025-01-15T08:30:00-05:00,9.99,BOOKS_RECORDS,"the ""best"" album"\n'

        assert parse(text)[0].note == 'the "best" album'

    def test_quote_mid_field_toggles_quoting(self) -> None:
        """Should treat a stray quote as opening a quoted section."""
        text = f'{HEADER}\n2025-01-15T08:30:00-05:00,199.00,SHOPPING,27" monitor, used\n'

        entries = parse(text)

        assert entries[0].note == "27 monitor, used"
        assert entries[0].category == "SHOPPING"

    def test_unterminated_quote_runs_to_end_of_line(self) -> None:
        text = f'{HEADER}\n2025-01-15T08:30:00-05:00,5.00,OTHER,"abc, def\n'

        assert parse(text)[0].note == "abc, def"

    def test_quoted_field_ending_with_escaped_quote(self) -> None:
        text = f'{HEADER}\n2025-01-15T08:30:00-05:00,5.00,OTHER,"say ""hi"""\n'

        assert parse(text)[0].note == 'say "hi"'

    def test_missing_trailing_fields(self) -> None:
        """Should fill missing fields with defaults."""
        entries = parse(f"{HEADER}\n2025-01-15T08:30:00-05:00\n")

        assert entries == [Entry(timestamp="2025-01-15T08:30:00-05:00", amount=Money(Decimal(0)), category="", note="")]

    def test_non_numeric_amount_is_zero(self) -> None:
        """Should decode a non-numeric amount to zero without failing the row."""
        entries = parse(f"{HEADER}\n2025-01-15T08:30:00-05:00,abc,GROCERIES,milk\n")

        assert entries[0].amount == 0
        assert entries[0].note == "milk"

    def test_malformed_row_does_not_abort(self) -> None:
        """Should parse every row independently."""
        text = f"{HEADER}\n,,,\nnot a row\n2025-01-15T08:30:00-05:00,3.00,TRAVEL,bus\n"

        entries = parse(text)

        assert len(entries) == 3
        assert entries[2].amount == Decimal("3.00")

    def test_skips_blank_lines_and_crlf(self) -> None:
        """Should skip blank lines and tolerate CRLF line endings."""
        text = f"{HEADER}\r\n2025-01-15T08:30:00-05:00,3.00,TRAVEL,bus\r\n\r\n"

        entries = parse(text)

        assert len(entries) == 1
        assert entries[0].note == "bus"


class TestParseAmount:
    """Tests for parse_amount."""

    def test_plain_number(self) -> None:
        assert parse_amount("12.34") == Decimal("12.34")

    def test_numeric_prefix(self) -> None:
        """Should use the leading number like parseFloat."""
        assert parse_amount("12.5abc") == Decimal("12.5")

    def test_empty_is_zero(self) -> None:
        assert parse_amount("") == 0

    def test_text_is_zero(self) -> None:
        assert parse_amount("twelve") == 0


class TestSerializeRow:
    """Tests for serialize_row."""

    def test_two_decimal_amount(self) -> None:
        """Should always write two decimal places."""
        row = serialize_row(make_entry(amount="7"))

        assert row == "2025-01-15T08:30:00-05:00,7.00,GROCERIES,"

    def test_plain_note_not_quoted(self) -> None:
        """Should not quote a note without commas or quotes."""
        row = serialize_row(make_entry(note="weekly shop"))

        assert row.endswith(",weekly shop")
        assert '"' not in row

    def test_note_with_comma_is_quoted(self) -> None:
        row = serialize_row(make_entry(note="milk, eggs"))

        assert row.endswith(',"milk, eggs"')

    def test_note_with_quote_is_escaped(self) -> None:
        row = serialize_row(make_entry(note='say "cheese"'))

        assert row.endswith(',"say ""cheese"""')


class TestRoundTrip:
    """parse(serialize_row(e)) gives back e."""

    def test_simple_entry(self) -> None:
        entry = make_entry(note="lunch")
        assert round_trip(entry) == [entry]

    def test_note_with_comma(self) -> None:
        entry = make_entry(note="milk, eggs, bread")
        assert round_trip(entry) == [entry]

    def test_note_with_quotes(self) -> None:
        entry = make_entry(note='"quoted" and, comma')
        assert round_trip(entry) == [entry]

    def test_non_ascii_note(self) -> None:
        entry = make_entry(note="café ☕")
        assert round_trip(entry) == [entry]

    def test_amount_compared_by_value(self) -> None:
        """Should compare amounts numerically (12.5 == 12.50)."""
        entry = make_entry(amount="12.5")
        assert round_trip(entry) == [entry]
