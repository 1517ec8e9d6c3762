"""Tests for spendlog.domain.models."""

from decimal import Decimal

from spendlog.domain.models import DEFAULT_DISCRETIONARY, Category, is_discretionary, to_money


class TestCategory:
    """Tests for Category.parse."""

    def test_parses_exact_tag(self) -> None:
        assert Category.parse("GROCERIES") is Category.GROCERIES

    def test_parses_case_insensitively(self) -> None:
        assert Category.parse(" books_records ") is Category.BOOKS_RECORDS

    def test_unknown_tag(self) -> None:
        assert Category.parse("CASINO") is None

    def test_compares_equal_to_its_tag(self) -> None:
        """Should compare equal to the raw string stored in the ledger."""
        assert Category.TRAVEL == "TRAVEL"


class TestIsDiscretionary:
    """Tests for is_discretionary."""

    def test_default_set(self) -> None:
        assert is_discretionary("RESTAURANTS", DEFAULT_DISCRETIONARY)
        assert not is_discretionary("RENT", DEFAULT_DISCRETIONARY)

    def test_custom_set(self) -> None:
        assert is_discretionary("RENT", {Category.RENT})
        assert not is_discretionary("GROCERIES", {Category.RENT})

    def test_empty_and_unknown_tags(self) -> None:
        assert not is_discretionary("", DEFAULT_DISCRETIONARY)
        assert not is_discretionary("WHATEVER", DEFAULT_DISCRETIONARY)


class TestToMoney:
    """Tests for to_money."""

    def test_rounds_half_up(self) -> None:
        assert to_money("2.675") == Decimal("2.68")

    def test_pads_to_cents(self) -> None:
        assert str(to_money(5)) == "5.00"
