"""Local settings: the cached GitHub token and the wallet start date.

Both live in a small TOML file next to the config, readable only by the
owner. The token can also come from the SPENDLOG_TOKEN environment variable.
"""

import logging
import os
import tomllib
from datetime import date
from pathlib import Path
from typing import Any

from spendlog.config import get_config_dir, write_toml
from spendlog.dates import START_DATE_FORMAT, parse_start_date

TOKEN_ENV_VAR = "SPENDLOG_TOKEN"

logger = logging.getLogger(__name__)


def get_settings_path() -> Path:
    return get_config_dir() / "settings.toml"


def load_settings(settings_path: Path | None = None) -> dict[str, Any]:
    """Load local settings.

    Args:
        settings_path: Path to settings file. If None, uses default location.

    Returns:
        Settings dictionary, empty if the file doesn't exist yet.

    Raises:
        ValueError: If the settings file is not valid TOML.
    """
    if settings_path is None:
        settings_path = get_settings_path()

    try:
        with open(settings_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Settings file {settings_path} is not valid TOML: {e}") from e


def save_settings(settings: dict[str, Any], settings_path: Path | None = None) -> None:
    if settings_path is None:
        settings_path = get_settings_path()
    write_toml(settings, settings_path)


def _update(settings_path: Path | None, **changes: Any) -> None:
    """Set keys (or drop them when the value is None) and save."""
    settings = load_settings(settings_path)
    for key, value in changes.items():
        if value is None:
            settings.pop(key, None)
        else:
            settings[key] = value
    save_settings(settings, settings_path)


def get_token(settings_path: Path | None = None) -> str | None:
    """Get the GitHub token.

    Returns:
        Token from the environment, else the saved one, else None.
    """
    env_token = os.environ.get(TOKEN_ENV_VAR)
    if env_token:
        return env_token
    return load_settings(settings_path).get("token") or None


def set_token(token: str, settings_path: Path | None = None) -> None:
    _update(settings_path, token=token.strip())


def clear_token(settings_path: Path | None = None) -> None:
    _update(settings_path, token=None)


def get_wallet_start_date(settings_path: Path | None = None) -> date | None:
    """Get the saved wallet start date.

    Returns:
        The saved date, or None if unset or not a valid YYYY-MM-DD date.
    """
    raw = load_settings(settings_path).get("wallet_start_date")
    if not raw:
        return None
    try:
        return parse_start_date(str(raw))
    except ValueError:
        logger.warning("Ignoring invalid wallet_start_date %r in settings", raw)
        return None


def set_wallet_start_date(start: date, settings_path: Path | None = None) -> None:
    _update(settings_path, wallet_start_date=start.strftime(START_DATE_FORMAT))


def clear_wallet_start_date(settings_path: Path | None = None) -> None:
    _update(settings_path, wallet_start_date=None)
