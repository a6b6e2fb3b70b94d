"""Main CLI entry point."""

import click

from agencybooks.database.factories import create_sqlite_database
from agencybooks.domain.booking import BookingService
from agencybooks.domain.expense import ExpenseService
from agencybooks.domain.reporting import ReportService
from agencybooks.domain.wallet import WalletLedger
from agencybooks.settings import Settings
from agencybooks.utils.logging import configure_logging

# Import and register all commands at module level
from agencybooks.cli.commands import booking, expense, report, wallet


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides AGENCYBOOKS_DB_PATH environment variable)",
    envvar="AGENCYBOOKS_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="AGENCYBOOKS_LOG_LEVEL",
    help="Logging level (overrides AGENCYBOOKS_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Agencybooks - bookings, wallets and expenses for a travel agency.

    Record sales and costs, move money between cash wallets and report
    revenue, expenses and profit over rolling windows.
    """
    ctx.ensure_object(dict)

    # Build services only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    try:
        settings = Settings.from_env()
    except ValueError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        ctx.exit(1)
    configure_logging(log_level or settings.log_level)

    db = create_sqlite_database(database_path=db_path or settings.database_path)
    db.connect()
    db.initialize_schema()
    ctx.call_on_close(db.disconnect)

    bookings = BookingService(db)
    expenses = ExpenseService(db)
    ctx.obj["db"] = db
    ctx.obj["bookings"] = bookings
    ctx.obj["expenses"] = expenses
    ctx.obj["wallets"] = WalletLedger(db, initial_balances=settings.wallet_seeds)
    ctx.obj["reports"] = ReportService(bookings, expenses)


# Register all commands
booking.register_commands(cli)
wallet.register_commands(cli)
expense.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
