"""Shared setup for commands that talk to the ledger."""

import sys

from rich.console import Console

from spendlog.config import AppConfig, get_config_path, load_config
from spendlog.github import GitHubClient
from spendlog.settings import get_token
from spendlog.store.ledger import LedgerStore
from spendlog.workflow import SubmissionController

console = Console()


def load_config_or_exit() -> AppConfig:
    """Load the config, exiting with a message if it is missing or invalid."""
    try:
        return load_config()
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'spendlog init' first.[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid config: {e}[/red]", style="bold")
        console.print(f"[dim]Config: {get_config_path()}[/dim]")
        sys.exit(1)


def build_controller(config: AppConfig) -> SubmissionController:
    """Wire the GitHub client, ledger store and controller together."""
    try:
        token = get_token()
    except ValueError as e:
        console.print(f"[red]Invalid settings: {e}[/red]", style="bold")
        sys.exit(1)
    if not token:
        console.print("[red]No GitHub token saved. Run 'spendlog token' first.[/red]", style="bold")
        sys.exit(1)

    client = GitHubClient(config.owner, config.repo, token, timeout=config.timeout, branch=config.branch)
    store = LedgerStore(client, config.csv_path)
    return SubmissionController(store, config)
