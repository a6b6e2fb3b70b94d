"""Reporting commands."""

import click

from agencybooks.cli.error_handling import format_money
from agencybooks.domain.entities import Granularity, Trend
from agencybooks.domain.reporting import TOP_KEYS, ReportService
from agencybooks.utils.date_parser import parse_date

GRANULARITY_CHOICES = [g.value for g in Granularity]


@click.group("report")
def report_group():
    """Revenue, expense and profit reports."""
    pass


@report_group.command("series")
@click.option(
    "--granularity",
    type=click.Choice(GRANULARITY_CHOICES, case_sensitive=False),
    default=Granularity.DAILY.value,
    show_default=True,
)
@click.option("--end", "end_date", help="Last day of the window (defaults to now)")
@click.pass_context
def series(ctx, granularity: str, end_date: str | None):
    """Show revenue, expense and profit per period."""
    service: ReportService = ctx.obj["reports"]

    window_end = None
    if end_date:
        try:
            window_end = parse_date(end_date).date()
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    buckets = service.revenue_series(granularity, window_end)
    click.echo(f"{'Period':12s} {'Revenue':>12s} {'Expense':>12s} {'Profit':>12s}")
    click.echo("-" * 51)
    for b in buckets:
        click.echo(
            f"{b.label:12s} {format_money(b.revenue):>12s} "
            f"{format_money(b.expense):>12s} {format_money(b.profit):>12s}"
        )

    summary = service.series_summary(granularity, window_end)
    click.echo("-" * 51)
    click.echo(
        f"{'Total':12s} {format_money(summary.total_revenue):>12s} "
        f"{format_money(summary.total_expense):>12s} {format_money(summary.total_profit):>12s}"
    )
    click.echo(f"Average revenue: {format_money(summary.average_revenue)}")
    if summary.highest is not None:
        click.echo(f"Best period: {summary.highest.label} ({format_money(summary.highest.revenue)})")
    click.echo(f"Latest trend: {summary.trend.label}")


@report_group.command("top")
@click.option(
    "--by",
    type=click.Choice(list(TOP_KEYS)),
    default="customer",
    show_default=True,
)
@click.option("--limit", type=int, default=5, show_default=True)
@click.pass_context
def top(ctx, by: str, limit: int):
    """Show the largest revenue sources."""
    service: ReportService = ctx.obj["reports"]
    ranked = service.top_revenue_sources(by=by, limit=limit)
    if not ranked:
        click.echo("No bookings found.")
        return
    for position, row in enumerate(ranked, start=1):
        click.echo(f"{position:2d}. {row.name:24s} {format_money(row.amount):>12s}")


def _trend_line(title: str, current: str, trend: Trend) -> str:
    return f"{title:18s} {current:>12s}  {trend.label}"


@report_group.command("compare")
@click.pass_context
def compare(ctx):
    """Compare this month with last month."""
    service: ReportService = ctx.obj["reports"]
    comparison = service.compare_periods()
    current = comparison.current

    click.echo(f"{current.start:%B %Y} vs {comparison.previous.start:%B %Y}")
    click.echo(_trend_line("Bookings", str(current.booking_count), comparison.bookings_trend))
    click.echo(_trend_line("Revenue", format_money(current.revenue), comparison.revenue_trend))
    click.echo(_trend_line("Average booking", format_money(current.average_booking), comparison.average_trend))
    click.echo(_trend_line("Highest booking", format_money(current.highest_booking), comparison.highest_trend))
    click.echo(_trend_line("Expenses", format_money(current.expenses), comparison.expenses_trend))
    click.echo(_trend_line("Net profit", format_money(current.profit), comparison.profit_trend))

    to_date = service.revenue_to_date()
    click.echo(
        "Revenue to date: "
        + ", ".join(f"{g.value} {format_money(amount)}" for g, amount in to_date.items())
    )


@report_group.command("export")
@click.pass_context
def export(ctx):
    """List bookings and expenses in date order."""
    service: ReportService = ctx.obj["reports"]
    rows = service.export_rows()
    if not rows:
        click.echo("Nothing to export.")
        return
    for row in rows:
        click.echo(
            f"{row.kind:8s} | {row.date:%Y-%m-%d} | {row.description:24s} | "
            f"{format_money(row.amount):>12s} | {row.category}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group)
