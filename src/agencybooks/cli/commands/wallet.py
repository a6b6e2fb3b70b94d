"""Wallet commands."""

import click

from agencybooks.cli.error_handling import format_money, handle_domain_error, warn_if_unsaved
from agencybooks.domain.errors import DomainError
from agencybooks.domain.wallet import WalletLedger


@click.group("wallet")
def wallet_group():
    """Manage cash wallets."""
    pass


@wallet_group.command("list")
@click.pass_context
def list_wallets(ctx):
    """List wallets and balances."""
    ledger: WalletLedger = ctx.obj["wallets"]
    wallets = ledger.list_wallets()
    if not wallets:
        click.echo("No wallets found.")
        return

    click.echo("\nWallets:")
    click.echo("-" * 60)
    for w in wallets:
        click.echo(f"{w.key:12s} | {w.name:20s} | Balance: {format_money(w.balance)}")


def _move(ctx, operation: str, wallet_key: str, amount: str, actor: str) -> None:
    ledger: WalletLedger = ctx.obj["wallets"]
    try:
        if operation == "credit":
            entry = ledger.credit(wallet_key, amount, actor)
        else:
            entry = ledger.debit(wallet_key, amount, actor)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    verb = "Credited" if operation == "credit" else "Debited"
    click.echo(f"{verb} {format_money(entry.amount)} ({entry.id})")
    click.echo(f"  Balance of {wallet_key}: {format_money(ledger.balance_of(wallet_key))}")
    warn_if_unsaved(ledger)


@wallet_group.command("credit")
@click.argument("wallet_key")
@click.argument("amount")
@click.option("--by", "actor", default="System", help="Who made the change")
@click.pass_context
def credit_wallet(ctx, wallet_key: str, amount: str, actor: str):
    """Add AMOUNT to a wallet.

    Examples:
        agencybooks wallet credit office 500 --by Sam
    """
    _move(ctx, "credit", wallet_key, amount, actor)


@wallet_group.command("debit")
@click.argument("wallet_key")
@click.argument("amount")
@click.option("--by", "actor", default="System", help="Who made the change")
@click.pass_context
def debit_wallet(ctx, wallet_key: str, amount: str, actor: str):
    """Withdraw AMOUNT from a wallet; fails if the balance is too low."""
    _move(ctx, "debit", wallet_key, amount, actor)


@wallet_group.command("history")
@click.argument("wallet_key", required=False)
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum entries to show")
@click.pass_context
def wallet_history(ctx, wallet_key: str | None, limit: int):
    """Show ledger entries, newest first."""
    ledger: WalletLedger = ctx.obj["wallets"]
    entries = ledger.history(wallet_key, limit)
    if not entries:
        click.echo("No transactions found.")
        return

    for e in entries:
        sign = "+" if e.operation.value == "credit" else "-"
        click.echo(
            f"{e.timestamp:%Y-%m-%d %H:%M} | {e.wallet_key:10s} | "
            f"{sign}{format_money(e.amount):>12s} | {e.actor}"
        )


def register_commands(cli):
    """Register wallet commands with main CLI."""
    cli.add_command(wallet_group)
