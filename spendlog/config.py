"""Configuration file management for spendlog."""

import os
import tomllib
from dataclasses import dataclass, field
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

import tomli_w

from spendlog.domain.models import DEFAULT_DISCRETIONARY, Category, Money, to_money
from spendlog.github import DEFAULT_TIMEOUT

DEFAULT_CONFIG: dict[str, Any] = {
    "owner": "",
    "repo": "spending",
    "csv_path": "spending_log.csv",
    "daily_target": "80.00",
    "discretionary": sorted(c.value for c in DEFAULT_DISCRETIONARY),
    "timeout": DEFAULT_TIMEOUT,
}


@dataclass(frozen=True)
class AppConfig:
    """Static settings loaded at startup."""

    owner: str
    repo: str
    csv_path: str = "spending_log.csv"
    daily_target: Money = field(default_factory=lambda: to_money("80.00"))
    discretionary: frozenset[Category] = DEFAULT_DISCRETIONARY
    timeout: float = DEFAULT_TIMEOUT
    branch: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """Build and validate a config from parsed TOML.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        owner = str(data.get("owner", "")).strip()
        repo = str(data.get("repo", "")).strip()
        if not owner or not repo:
            raise ValueError("Config must set both 'owner' and 'repo'")

        try:
            target = to_money(str(data.get("daily_target", DEFAULT_CONFIG["daily_target"])))
        except InvalidOperation as e:
            raise ValueError(f"Invalid daily_target: {data.get('daily_target')!r}") from e
        if target <= 0:
            raise ValueError("daily_target must be positive")

        names = data.get("discretionary", DEFAULT_CONFIG["discretionary"])
        discretionary = set()
        for name in names:
            category = Category.parse(str(name))
            if category is None:
                raise ValueError(f"Unknown discretionary category: {name!r}")
            discretionary.add(category)

        timeout = float(data.get("timeout", DEFAULT_TIMEOUT))
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        return cls(
            owner=owner,
            repo=repo,
            csv_path=str(data.get("csv_path", DEFAULT_CONFIG["csv_path"])),
            daily_target=target,
            discretionary=frozenset(discretionary),
            timeout=timeout,
            branch=data.get("branch") or None,
        )


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_dir() -> Path:
    return get_xdg_config_home() / "spendlog"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_config_dir() / "config.toml"


def write_toml(data: dict[str, Any], path: Path) -> None:
    """Write a TOML file readable only by the owner."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(path, 0o600)


def create_default_config(config_path: Path | None = None, owner: str = "") -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        owner: Repository owner to pre-fill.
    """
    if config_path is None:
        config_path = get_config_path()

    default_config = dict(DEFAULT_CONFIG)
    default_config["owner"] = owner
    write_toml(default_config, config_path)


def load_config_dict(config_path: Path | None = None) -> dict[str, Any]:
    """Load raw configuration from TOML file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Validated AppConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the config is invalid.
    """
    try:
        data = load_config_dict(config_path)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Config is not valid TOML: {e}") from e
    return AppConfig.from_dict(data)
