"""Store layer - persistence for the ledger.

This module re-exports the public store API for easy importing.
"""

from spendlog.store.ledger import LedgerStore, build_appended_content, commit_message

__all__ = [
    "LedgerStore",
    "build_appended_content",
    "commit_message",
]
