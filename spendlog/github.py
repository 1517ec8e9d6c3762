"""GitHub contents API interactions.

The ledger lives in a repository as a single file. Reads return the file
text and its blob sha; writes replace the whole file and must carry the sha
they were based on, so GitHub rejects a write against a stale version.

File content travels as base64 over explicit UTF-8 bytes so non-ASCII notes
survive the round trip.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from spendlog.errors import ConflictError, RemoteError

API_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteFile:
    """A file read from the repository."""

    path: str
    content: str
    sha: str


def encode_content(text: str) -> str:
    """Base64-encode text as UTF-8 bytes."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(payload: str) -> str:
    """Decode base64 content (GitHub wraps it at 60 columns) to text."""
    return base64.b64decode(payload).decode("utf-8")


def _error_message(response: requests.Response) -> str:
    """Pull GitHub's error message out of a failed response."""
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    return message or f"GitHub API error: {response.status_code}"


class GitHubClient:
    """Minimal client for reading and writing one repository's files."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None,
        timeout: float = DEFAULT_TIMEOUT,
        branch: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.token = token
        self.timeout = timeout
        self.branch = branch
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            raise RemoteError("No GitHub token configured. Run 'spendlog token' first.")
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    def _url(self, suffix: str) -> str:
        return f"{API_BASE_URL}/repos/{self.owner}/{self.repo}/{suffix}"

    def _contents_url(self, path: str) -> str:
        return self._url(f"contents/{quote(path)}")

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request, converting transport failures to RemoteError."""
        headers = self._headers()
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise RemoteError(f"GitHub request timed out after {self.timeout:g}s") from e
        except requests.RequestException as e:
            raise RemoteError(f"Could not reach GitHub: {e}") from e

    def get_file(self, path: str) -> RemoteFile | None:
        """Read a file from the repository.

        Args:
            path: File path inside the repository.

        Returns:
            RemoteFile, or None if the file does not exist.

        Raises:
            RemoteError: If the request fails for any other reason.
        """
        params = {"ref": self.branch} if self.branch else None
        response = self._request("GET", self._contents_url(path), params=params)
        if response.status_code == 404:
            logger.info("%s not found in %s/%s", path, self.owner, self.repo)
            return None
        if not response.ok:
            raise RemoteError(_error_message(response))

        try:
            payload = response.json()
            sha = payload["sha"]
            if payload.get("encoding") == "base64" and payload.get("content") is not None:
                content = decode_content(payload["content"])
            else:
                # Files over 1 MB come back without inline content
                content = self.get_blob(sha)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Unexpected response for {path}: {e}") from e
        return RemoteFile(path=path, content=content, sha=sha)

    def get_blob(self, sha: str) -> str:
        """Read a git blob by sha and decode it as UTF-8 text.

        Raises:
            RemoteError: If the request fails.
        """
        response = self._request("GET", self._url(f"git/blobs/{sha}"))
        if not response.ok:
            raise RemoteError(_error_message(response))
        return decode_content(response.json()["content"])

    def put_file(self, path: str, content: str, message: str, sha: str | None = None) -> str:
        """Create or replace a file in the repository.

        Args:
            path: File path inside the repository.
            content: Full new file content.
            message: Commit message.
            sha: Blob sha the new content is based on. None creates the file.

        Returns:
            Blob sha of the written file.

        Raises:
            ConflictError: If the file changed since ``sha`` was read.
            RemoteError: If the request fails for any other reason.
        """
        body: dict[str, Any] = {"message": message, "content": encode_content(content)}
        if sha:
            body["sha"] = sha
        if self.branch:
            body["branch"] = self.branch

        response = self._request("PUT", self._contents_url(path), json=body)
        if response.ok:
            try:
                return response.json()["content"]["sha"]
            except (KeyError, TypeError, ValueError) as e:
                raise RemoteError(f"Unexpected response writing {path}: {e}") from e

        message_text = _error_message(response)
        if response.status_code == 409 or (response.status_code == 422 and "sha" in message_text):
            raise ConflictError(message_text)
        raise RemoteError(message_text)
