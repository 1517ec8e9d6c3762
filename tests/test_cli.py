"""Smoke tests for the spendlog CLI."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendlog.cli import app
from spendlog.config import get_config_path
from spendlog.settings import TOKEN_ENV_VAR, get_settings_path, get_token, get_wallet_start_date

runner = CliRunner()


@pytest.fixture(autouse=True)
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
    return tmp_path


class TestInit:
    """Tests for 'spendlog init'."""

    def test_creates_config(self) -> None:
        result = runner.invoke(app, ["init", "--owner", "me"])

        assert result.exit_code == 0
        assert get_config_path().exists()

    def test_refuses_to_overwrite(self) -> None:
        runner.invoke(app, ["init", "--owner", "me"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output


class TestCategories:
    """Tests for 'spendlog categories'."""

    def test_requires_config(self) -> None:
        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 1
        assert "spendlog init" in result.output

    def test_lists_categories(self) -> None:
        runner.invoke(app, ["init", "--owner", "me"])

        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "GROCERIES" in result.output
        assert "RENT" in result.output


class TestToken:
    """Tests for 'spendlog token'."""

    def test_saves_and_clears(self) -> None:
        result = runner.invoke(app, ["token"], input="ghp_secret\n")

        assert result.exit_code == 0
        assert get_token() == "ghp_secret"
        assert "ghp_secret" not in result.output

        runner.invoke(app, ["token", "--clear"])
        assert get_token() is None


class TestStartDate:
    """Tests for 'spendlog start-date'."""

    def test_set_show_clear(self) -> None:
        result = runner.invoke(app, ["start-date", "15/01/2025"])
        assert result.exit_code == 0
        assert "2025-01-15" in result.output

        result = runner.invoke(app, ["start-date"])
        assert result.exit_code == 0
        assert "2025-01-15" in result.output

        result = runner.invoke(app, ["start-date", "--clear"])
        assert result.exit_code == 0
        assert "wallet_start_date" not in get_settings_path().read_text()

    def test_iso_date_stored_as_given(self) -> None:
        """Should store 2025-01-02 as January 2nd, not February 1st."""
        result = runner.invoke(app, ["start-date", "2025-01-02"])

        assert result.exit_code == 0
        assert get_wallet_start_date() == date(2025, 1, 2)
        assert 'wallet_start_date = "2025-01-02"' in get_settings_path().read_text()

    def test_rejects_bad_date(self) -> None:
        result = runner.invoke(app, ["start-date", "someday"])

        assert result.exit_code == 1
        assert "Invalid date" in result.output


class TestLog:
    """Tests for 'spendlog log'."""

    def test_requires_token(self) -> None:
        runner.invoke(app, ["init", "--owner", "me"])

        result = runner.invoke(app, ["log", "12.50", "GROCERIES"])

        assert result.exit_code == 1
        assert "spendlog token" in result.output

    def test_corrupt_settings_reported(self) -> None:
        """Should report an unreadable settings file instead of crashing."""
        runner.invoke(app, ["init", "--owner", "me"])
        get_settings_path().write_text("token = \n")

        result = runner.invoke(app, ["log", "12.50", "GROCERIES"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output
        assert not isinstance(result.exception, ValueError)
