"""Exceptions raised by spendlog.

A missing ledger file is not an error: the store reports it as an empty
ledger with no version.
"""


class SpendlogError(Exception):
    """Base exception for spendlog."""


class RemoteError(SpendlogError):
    """The remote file API failed (network, auth, rate limit, server)."""


class ConflictError(RemoteError):
    """The remote file changed since it was last read."""


class ValidationError(SpendlogError):
    """User input cannot be submitted."""
