"""Shared fixtures: an in-memory stand-in for the GitHub contents API."""

import hashlib
from pathlib import Path

import pytest

from spendlog.config import AppConfig
from spendlog.domain.models import to_money
from spendlog.errors import ConflictError, RemoteError
from spendlog.github import RemoteFile

LEDGER_PATH = "spending_log.csv"


class FakeContentsClient:
    """Versioned in-memory file store with the same interface as GitHubClient."""

    def __init__(self) -> None:
        self.files: dict[str, RemoteFile] = {}
        self.writes: list[tuple[str, str, str, str | None]] = []
        self.reads = 0
        self.error: RemoteError | None = None

    def seed(self, path: str, content: str) -> str:
        """Put a file in place as if another writer had committed it."""
        sha = hashlib.sha1(content.encode("utf-8")).hexdigest()
        self.files[path] = RemoteFile(path=path, content=content, sha=sha)
        return sha

    def get_file(self, path: str) -> RemoteFile | None:
        self.reads += 1
        if self.error:
            raise self.error
        return self.files.get(path)

    def put_file(self, path: str, content: str, message: str, sha: str | None = None) -> str:
        if self.error:
            raise self.error
        current = self.files.get(path)
        current_sha = current.sha if current else None
        if sha != current_sha:
            raise ConflictError(f"{path} does not match {sha}")
        self.writes.append((path, content, message, sha))
        return self.seed(path, content)


@pytest.fixture
def fake_client() -> FakeContentsClient:
    return FakeContentsClient()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(owner="someone", repo="spending", csv_path=LEDGER_PATH, daily_target=to_money("80.00"))


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.toml"
