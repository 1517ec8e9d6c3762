"""spendlog - log daily spending to a CSV ledger kept in a GitHub repository."""

__version__ = "0.1.0"
