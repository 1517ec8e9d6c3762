"""Versioned read-then-append access to the remote ledger file."""

import logging

from spendlog.domain.csv_codec import HEADER, parse, serialize_row
from spendlog.domain.models import Entry, to_money
from spendlog.errors import ConflictError
from spendlog.github import GitHubClient, RemoteFile

logger = logging.getLogger(__name__)


def build_appended_content(prior: str | None, entry: Entry) -> str:
    """Build the full ledger content after appending an entry.

    Args:
        prior: Current file content, or None when the file does not exist.
        entry: Entry to append.

    Returns:
        New file content, always ending with a newline.
    """
    row = serialize_row(entry)
    if prior is None:
        return f"{HEADER}\n{row}\n"
    if not prior.endswith("\n"):
        prior += "\n"
    return f"{prior}{row}\n"


def commit_message(entry: Entry) -> str:
    """Commit message for an appended entry, e.g. 'spending: $12.50 GROCERIES'."""
    return f"spending: ${to_money(entry.amount):.2f} {entry.category}"


class LedgerStore:
    """The spending ledger as one CSV file in a repository.

    Every append rewrites the whole file, conditional on the version it was
    read at. There is no retry or merge: a conflict is reported to the
    caller.
    """

    def __init__(self, client: GitHubClient, path: str) -> None:
        self.client = client
        self.path = path
        self._last: RemoteFile | None = None

    def fetch_ledger(self) -> tuple[list[Entry], str | None]:
        """Read and parse the ledger.

        Returns:
            Tuple of (entries, version). A missing file is an empty ledger
            with version None.

        Raises:
            RemoteError: If the file cannot be read.
        """
        remote = self.client.get_file(self.path)
        self._last = remote
        if remote is None:
            return [], None
        entries = parse(remote.content)
        logger.debug("Fetched %d entries at %s", len(entries), remote.sha)
        return entries, remote.sha

    def _content_at(self, version: str) -> str:
        """Get the file content for a version, re-reading it if needed."""
        if self._last is not None and self._last.sha == version:
            return self._last.content

        remote = self.client.get_file(self.path)
        self._last = remote
        if remote is None or remote.sha != version:
            raise ConflictError(f"{self.path} changed since version {version[:7]} was read")
        return remote.content

    def append_entry(self, entry: Entry, version: str | None) -> str:
        """Append an entry with a single conditional write.

        Args:
            entry: Entry to append.
            version: Version the caller last read, or None to create the file.

        Returns:
            The new version.

        Raises:
            ConflictError: If the remote file is no longer at ``version``.
            RemoteError: If the write fails for any other reason.
        """
        prior = None if version is None else self._content_at(version)
        content = build_appended_content(prior, entry)
        new_version = self.client.put_file(self.path, content, commit_message(entry), version)
        self._last = RemoteFile(path=self.path, content=content, sha=new_version)
        logger.info("Appended %s %s, ledger now at %s", entry.category, entry.amount, new_version)
        return new_version
