"""Domain models and types for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Budget logic separated from the remote ledger and the CLI
"""

from spendlog.domain.models import DEFAULT_DISCRETIONARY, Category, Entry, Money, is_discretionary, to_money

__all__ = ["Category", "DEFAULT_DISCRETIONARY", "Entry", "Money", "is_discretionary", "to_money"]
