"""CLI for PaySplit using Typer."""

import json
import logging
import sys
import time
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .models import Balance, Direction, PaymentMessage, Transaction, Transfer
from .parsing.dates import from_epoch_ms
from .service import LedgerService
from .ui import confirm_participants, review_participants_interactive

app = typer.Typer(
    name="paysplit",
    help="Turn payment messages into shared expenses and settle up",
)

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def build_service(friends: list[str]) -> LedgerService:
    """Load settings and create a ledger, preferring roster names from the command line."""
    settings = load_settings()
    if friends:
        settings = settings.model_copy(update={"roster": friends})
    return LedgerService(settings)


def format_money(amount: Decimal, symbol: str = "₹", use_color: bool = True) -> str:
    """
    Format money in accounting style with alignment.

    Negative amounts use parentheses: (₹85.02)
    Positive amounts have spaces:      ₹85.02
    """
    abs_amount = abs(amount)
    if amount < 0:
        if use_color:
            return f"({symbol}[red]{abs_amount:,.2f}[/red])"
        return f"({symbol}{abs_amount:,.2f})"
    if use_color:
        return f" [green]{symbol}{abs_amount:,.2f}[/green] "
    return f" {symbol}{abs_amount:,.2f} "


def display_transactions(transactions: list[Transaction], settings: Settings):
    """Display transactions in a table."""
    table = Table(title="Transactions", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="dim", width=16)
    table.add_column("Description", style="cyan")
    table.add_column("Amount", justify="right", width=14)
    table.add_column("Paid by", style="yellow")
    table.add_column("Split between")
    table.add_column("Source", style="dim")

    for transaction in transactions:
        when = from_epoch_ms(transaction.timestamp_ms, settings.tzinfo)
        amount = transaction.amount
        if transaction.direction == Direction.INCOMING:
            amount = -amount  # money in shows as negative spend
        table.add_row(
            when.strftime("%Y-%m-%d %H:%M"),
            transaction.description,
            format_money(amount, settings.currency_symbol),
            transaction.counterparty,
            ", ".join(transaction.participants),
            "message" if transaction.auto_detected else "manual",
        )

    console.print(table)


def display_settlement(
    balances: list[Balance], transfers: list[Transfer], settings: Settings
):
    """Display balances and the settle-up plan."""
    table = Table(title="Balances", show_header=True, header_style="bold magenta")
    table.add_column("Person", style="cyan")
    table.add_column("Net", justify="right", width=14)

    for balance in balances:
        table.add_row(balance.person, format_money(balance.amount, settings.currency_symbol))

    console.print()
    console.print(table)

    console.print("\n[bold]Settle up:[/bold]")
    if not transfers:
        console.print("  [green]✓ Everyone is settled[/green]")
        return

    for transfer in transfers:
        console.print(
            f"  {transfer.from_person} → {transfer.to_person}: "
            f"{format_money(transfer.amount, settings.currency_symbol, use_color=False).strip()}"
        )


def review_transactions(service: LedgerService):
    """Walk through detected splits and let the user fix participants."""
    roster = service.roster
    for transaction in service.transactions:
        if not transaction.auto_detected or confirm_participants(transaction):
            continue
        participants = review_participants_interactive(transaction, roster)
        if participants:
            service.update_participants(transaction.id, participants)


@app.command()
def parse(
    text: str = typer.Argument(..., help="Message text to parse"),
    friends: list[str] = typer.Option(
        [], "--friend", "-f", help="Roster name (repeatable)"
    ),
    timestamp: int | None = typer.Option(
        None, "--timestamp", "-t", help="Receipt time in epoch milliseconds"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Parse a single payment message.

    Prints the detected transaction, or exits with status 1 when the
    message is not recognized as a transaction.
    """
    setup_logging(verbose)

    try:
        service = build_service(friends)
        result = service.add_message(text, timestamp if timestamp is not None else now_ms())

        if result.transaction is None:
            console.print(
                "[yellow]Message not recognized as a transaction "
                f"({result.reason}).[/yellow]"
            )
            sys.exit(1)

        display_transactions([result.transaction], service.settings)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def settle(
    messages_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Text file, one message per line"
    ),
    friends: list[str] = typer.Option(
        [], "--friend", "-f", help="Roster name (repeatable)"
    ),
    timestamp: int | None = typer.Option(
        None, "--timestamp", "-t", help="Receipt time in epoch milliseconds"
    ),
    review: bool = typer.Option(
        False, "--review", "-r", help="Interactively review split participants"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Parse every message in a file and compute who pays whom.
    """
    setup_logging(verbose)

    try:
        service = build_service(friends)
        received_at = timestamp if timestamp is not None else now_ms()

        lines = messages_file.read_text(encoding="utf-8").splitlines()
        for line in lines:
            if line.strip():
                service.add_message(line.strip(), received_at)

        if review:
            console.print("\n[bold blue]Reviewing detected splits...[/bold blue]")
            review_transactions(service)

        show_ledger(service)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


@app.command()
def scan(
    export_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="JSON array of device messages ({id, address, body, date})",
    ),
    friends: list[str] = typer.Option(
        [], "--friend", "-f", help="Roster name (repeatable)"
    ),
    days_back: int | None = typer.Option(
        None, "--days-back", "-d", help="Only scan messages this recent"
    ),
    now: int | None = typer.Option(
        None, "--now", help="Current time in epoch milliseconds"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Scan exported device messages for payments and settle up.

    Only messages from known wallet/bank senders that mention a payment and
    an amount are parsed.
    """
    setup_logging(verbose)

    try:
        service = build_service(friends)

        raw = json.loads(export_file.read_text(encoding="utf-8"))
        messages = [
            PaymentMessage(
                id=str(item["id"]),
                sender=item.get("address") or "",
                body=item.get("body") or "",
                timestamp_ms=int(item["date"]),
            )
            for item in raw
        ]

        console.print(f"\n[bold blue]Scanning {len(messages)} messages...[/bold blue]")
        report = service.scan_messages(
            messages, now if now is not None else now_ms(), days_back
        )

        console.print(
            f"[green]Found {len(report.transactions)} transactions[/green] "
            f"[dim]({report.skipped} skipped, "
            f"{len(report.unrecognized)} unrecognized)[/dim]\n"
        )

        for message in report.unrecognized:
            console.print(f"  [yellow]?[/yellow] {message.body[:70]}")

        show_ledger(service)

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)


def show_ledger(service: LedgerService):
    """Display all transactions followed by balances and settlements."""
    transactions = service.transactions
    if not transactions:
        console.print("[yellow]No transactions found.[/yellow]")
        return

    display_transactions(transactions, service.settings)
    display_settlement(service.balances(), service.settlements(), service.settings)


if __name__ == "__main__":
    app()
