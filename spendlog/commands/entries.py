"""Commands for logging spending and showing today's status."""

import asyncio
import sys

from rich.console import Console
from rich.table import Table

from spendlog.commands.common import build_controller, load_config_or_exit
from spendlog.dates import format_day_label, format_entry_time
from spendlog.domain.metrics import DailyStatus
from spendlog.errors import ValidationError
from spendlog.workflow import Dashboard, SubmissionController

console = Console()

STATUS_STYLES = {
    DailyStatus.NORMAL: "green",
    DailyStatus.WARNING: "yellow",
    DailyStatus.OVER: "red",
}


def render_dashboard(dashboard: Dashboard) -> None:
    """Render today's total, the wallet balance and today's entries."""
    daily = dashboard.daily
    wallet = dashboard.wallet

    console.print(f"\n[bold]{format_day_label(daily.day)}[/bold]")
    style = STATUS_STYLES[daily.status]
    console.print(f"Today: [{style}]${daily.total:,.2f}[/{style}] of ${daily.target:,.2f}")

    if wallet.in_deficit:
        console.print(f"Wallet: [red]-${abs(wallet.balance):,.2f}[/red]")
        console.print(
            f"[dim]Back to zero in {wallet.days_to_recover} day(s), "
            f"on {wallet.recovery_date:%Y-%m-%d}, with no more discretionary spending[/dim]"
        )
    else:
        wallet_style = "yellow" if wallet.low else "green"
        console.print(f"Wallet: [{wallet_style}]${wallet.balance:,.2f}[/{wallet_style}]")
    console.print(f"[dim]Since {wallet.start_date:%Y-%m-%d} ({wallet.days_elapsed} day(s))[/dim]\n")

    if not dashboard.today_entries:
        console.print("[dim]No entries today[/dim]")
        return

    table = Table(title="Today")
    table.add_column("Time", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Note", style="white")
    table.add_column("Amount", justify="right")

    for entry in dashboard.today_entries:
        table.add_row(
            format_entry_time(entry.timestamp),
            entry.category,
            entry.note or "[dim]-[/dim]",
            f"${entry.amount:,.2f}",
        )

    console.print(table)


async def _log(controller: SubmissionController, amount: str, category: str, note: str) -> bool:
    loaded = await controller.load()
    if not loaded and controller.state.status:
        console.print(f"[yellow]{controller.state.status.text}[/yellow]")

    controller.set_amount(amount)
    controller.select_category(category)
    controller.set_note(note)
    return await controller.submit()


def log_command(amount: str, category: str, note: str = "") -> None:
    """Append an entry to the ledger.

    Args:
        amount: Amount spent, e.g. "12.50".
        category: Category tag (case-insensitive).
        note: Optional free-text note.
    """
    config = load_config_or_exit()
    controller = build_controller(config)

    try:
        ok = asyncio.run(_log(controller, amount, category, note))
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    status = controller.state.status
    if not ok:
        console.print(f"[red]{status.text if status else 'Failed'}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {status.text if status else 'Logged'}")
    if controller.state.loaded:
        render_dashboard(controller.dashboard())


def status_command() -> None:
    """Show today's spending status and the wallet balance."""
    config = load_config_or_exit()
    controller = build_controller(config)

    if not asyncio.run(controller.load()):
        status = controller.state.status
        console.print(f"[red]{status.text if status else 'Failed to load ledger'}[/red]", style="bold")
        sys.exit(1)

    render_dashboard(controller.dashboard())
