"""Admin commands for init, the GitHub token, categories and the wallet start date."""

import asyncio
import sys

import typer
from rich.console import Console
from rich.table import Table

from spendlog.commands.common import build_controller, load_config_or_exit
from spendlog.config import create_default_config, get_config_path
from spendlog.dates import normalize_date_input
from spendlog.domain.models import Category
from spendlog.settings import (
    clear_token,
    clear_wallet_start_date,
    get_settings_path,
    get_wallet_start_date,
    set_token,
    set_wallet_start_date,
)

console = Console()


def init_command(force: bool = False, owner: str = "") -> None:
    """Create the config file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[red]Config already exists: {config_path}[/red]", style="bold")
        console.print("\n[yellow]Use 'spendlog init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        create_default_config(config_path, owner=owner)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Config file created (permissions: 600)")
    console.print(f"[dim]Config: {config_path}[/dim]")
    if not owner:
        console.print("[yellow]Set 'owner' to the GitHub user or org that holds the ledger repo[/yellow]")


def token_command(clear: bool = False) -> None:
    """Save or clear the GitHub token."""
    if clear:
        clear_token()
        console.print("[green]✓[/green] Token cleared")
        return

    token: str = typer.prompt("GitHub token", hide_input=True)
    if not token.strip():
        console.print("[red]Token cannot be empty[/red]")
        sys.exit(1)

    try:
        set_token(token)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not save token: {e}[/red]", style="bold")
        sys.exit(1)
    console.print(f"[green]✓[/green] Token saved to {get_settings_path()} (permissions: 600)")


def categories_command() -> None:
    """List categories, marking the ones that count against the budget."""
    config = load_config_or_exit()

    table = Table(title="Categories")
    table.add_column("Category", style="magenta")
    table.add_column("Budgeted", justify="center")

    for category in Category:
        table.add_row(category.value, "✓" if category in config.discretionary else "[dim]-[/dim]")

    console.print(table)
    console.print(f"[dim]Daily target: ${config.daily_target:,.2f}[/dim]")


def start_date_command(value: str | None = None, clear: bool = False) -> None:
    """Show, set or clear the wallet start date."""
    if clear:
        clear_wallet_start_date()
        console.print("[green]✓[/green] Wallet start date cleared (will default to your first entry)")
        return

    if value is None:
        stored = get_wallet_start_date()
        if stored is not None:
            console.print(f"Wallet start date: {stored:%Y-%m-%d}")
            return

        # Not saved yet: resolve it from the ledger, which also saves it
        config = load_config_or_exit()
        controller = build_controller(config)
        if not asyncio.run(controller.load()):
            status = controller.state.status
            console.print(f"[red]{status.text if status else 'Failed to load ledger'}[/red]", style="bold")
            sys.exit(1)
        console.print(f"Wallet start date: {controller.wallet_start_date():%Y-%m-%d}")
        return

    try:
        start = normalize_date_input(value)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    set_wallet_start_date(start)
    console.print(f"[green]✓[/green] Wallet start date set to {start:%Y-%m-%d}")
