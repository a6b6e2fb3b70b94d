"""Expense commands."""

import click

from agencybooks.cli.error_handling import format_money, warn_if_unsaved
from agencybooks.domain.expense import ExpenseService
from agencybooks.utils.date_parser import parse_date


@click.group("expense")
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option("--category", default="Other", show_default=True, help="Expense category")
@click.option("--date", help="Expense date (defaults to now)")
@click.pass_context
def add_expense(ctx, description: str, amount: str, category: str, date: str | None):
    """Record an expense.

    Examples:
        agencybooks expense add "Diesel" 1200 --category Fuel
    """
    service: ExpenseService = ctx.obj["expenses"]

    expense_date = None
    if date:
        try:
            expense_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    expense = service.add_expense(description, amount, category, expense_date)
    if expense is None:
        click.echo("Expense not recorded: description and a positive amount are required.")
        return
    click.echo(f"Created expense {expense.id}: {expense.description} ({format_money(expense.amount)})")
    warn_if_unsaved(service)


@expense_group.command("list")
@click.pass_context
def list_expenses(ctx):
    """List expenses, newest first."""
    service: ExpenseService = ctx.obj["expenses"]
    expenses = service.list_expenses()
    if not expenses:
        click.echo("No expenses found.")
        return

    for e in expenses:
        click.echo(
            f"{e.id:12s} | {e.date:%Y-%m-%d} | {e.description:24s} | "
            f"{e.category:12s} | {format_money(e.amount):>12s}"
        )
    click.echo(f"Total: {format_money(service.total())}")


@expense_group.command("remove")
@click.argument("expense_id")
@click.pass_context
def remove_expense(ctx, expense_id: str):
    """Delete an expense."""
    service: ExpenseService = ctx.obj["expenses"]
    if service.remove_expense(expense_id):
        click.echo(f"Removed expense {expense_id}")
        warn_if_unsaved(service)
    else:
        click.echo(f"No expense with ID {expense_id}; nothing removed.")


@expense_group.command("categories")
@click.option("--all", "include_defaults", is_flag=True, help="Include empty default categories")
@click.pass_context
def category_totals(ctx, include_defaults: bool):
    """Show spending per category, largest first."""
    service: ExpenseService = ctx.obj["expenses"]
    totals = service.category_totals(include_defaults=include_defaults)
    if not totals:
        click.echo("No expenses found.")
        return
    for row in totals:
        click.echo(f"{row.name:20s} {format_money(row.amount):>12s}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group)
