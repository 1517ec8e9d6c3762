"""CLI entry point for spendlog."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from spendlog.commands.admin import categories_command, init_command, start_date_command, token_command
from spendlog.commands.entries import log_command, status_command

app = typer.Typer(
    name="spendlog",
    help="Log daily spending to a CSV ledger in a GitHub repository",
    add_completion=False,
)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # requests/urllib3 are noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Log daily spending to a CSV ledger in a GitHub repository."""
    setup_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    owner: str = typer.Option("", "--owner", help="GitHub user or org that owns the ledger repo"),
) -> None:
    """Initialize spendlog configuration."""
    init_command(force, owner)


@app.command()
def token(
    clear: bool = typer.Option(False, "--clear", help="Forget the saved token"),
) -> None:
    """Save your GitHub token (prompted, not echoed)."""
    token_command(clear)


@app.command(name="log")
def log_entry(
    amount: str,
    category: str,
    note: str = typer.Option("", "--note", "-n", help="Optional note"),
) -> None:
    """Log a spending entry."""
    log_command(amount, category, note)


@app.command()
def status() -> None:
    """Show today's spending and your wallet balance."""
    status_command()


@app.command(name="start-date")
def start_date(
    value: str = typer.Argument(None, help="New wallet start date (e.g. 2025-01-15)"),
    clear: bool = typer.Option(False, "--clear", help="Reset to your first entry's date"),
) -> None:
    """Show or change the date your wallet started accruing."""
    start_date_command(value, clear)


@app.command()
def categories() -> None:
    """List spending categories."""
    categories_command()


if __name__ == "__main__":
    app()
