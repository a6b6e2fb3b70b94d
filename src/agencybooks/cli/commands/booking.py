"""Booking management commands."""

import click

from agencybooks.cli.error_handling import format_money, handle_domain_error, warn_if_unsaved
from agencybooks.domain.booking import BookingService
from agencybooks.domain.entities import BookingCategory, BookingStatus
from agencybooks.domain.errors import DomainError, NotFoundError, booking_not_found

STATUS_CHOICES = [s.value for s in BookingStatus]
CATEGORY_CHOICES = [c.value for c in BookingCategory]


@click.group("booking")
def booking_group():
    """Manage bookings."""
    pass


@booking_group.command("add")
@click.option("--customer", "customer_name", required=True, help="Customer name")
@click.option("--email", required=True, help="Customer email")
@click.option("--contact", "contact_number", required=True, help="10-digit contact number")
@click.option(
    "--date",
    required=True,
    help="Booking date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--category", required=True, type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.option("--platform", help="Platform the booking was sold on (required for flight, hotel, cab)")
@click.option("--base-pay", default="0", help="Base pay collected")
@click.option("--commission", default="0", help="Commission earned")
@click.option("--markup", default="0", help="Markup earned")
@click.option("--status", default=BookingStatus.PENDING.value, type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def add_booking(
    ctx,
    customer_name: str,
    email: str,
    contact_number: str,
    date: str,
    category: str,
    platform: str | None,
    base_pay: str,
    commission: str,
    markup: str,
    status: str,
):
    """Add a booking.

    Examples:
        agencybooks booking add --customer "Asha" --email asha@x.com --contact 98765-43210 \\
            --date today --category flight --platform direct --commission 200 --markup 50
    """
    service: BookingService = ctx.obj["bookings"]
    try:
        booking = service.add_booking(
            {
                "customer_name": customer_name,
                "email": email,
                "contact_number": contact_number,
                "date": date,
                "category": category,
                "platform": platform,
                "base_pay": base_pay,
                "commission_amount": commission,
                "markup_amount": markup,
                "status": status,
            }
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created booking {booking.id}")
    click.echo(f"  Customer: {booking.customer_name} <{booking.email}>")
    click.echo(f"  Date: {booking.date:%Y-%m-%d}")
    click.echo(f"  Category: {booking.category.value}")
    click.echo(f"  Revenue: {format_money(booking.total_revenue)}")
    warn_if_unsaved(service)


@booking_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Filter by status")
@click.option("--search", help="Match customer name or booking ID")
@click.pass_context
def list_bookings(ctx, status: str | None, search: str | None):
    """List bookings, newest first."""
    service: BookingService = ctx.obj["bookings"]
    bookings = service.list_bookings(status=status, search=search)
    if not bookings:
        click.echo("No bookings found.")
        return

    click.echo("\nBookings:")
    click.echo("-" * 80)
    for b in bookings:
        click.echo(
            f"{b.id:12s} | {b.date:%Y-%m-%d} | {b.customer_name:20s} | "
            f"{b.category.value:6s} | {b.status.value:9s} | {format_money(b.total_revenue):>12s}"
        )


@booking_group.command("show")
@click.argument("booking_id")
@click.pass_context
def show_booking(ctx, booking_id: str):
    """Show a booking and the customer's history."""
    service: BookingService = ctx.obj["bookings"]
    booking = service.get_booking(booking_id)
    if booking is None:
        handle_domain_error(ctx, NotFoundError(booking_not_found(booking_id)))
        return

    click.echo(f"Booking {booking.id}")
    click.echo(f"  Customer: {booking.customer_name}")
    click.echo(f"  Email: {booking.email}")
    click.echo(f"  Contact: {booking.contact_number}")
    click.echo(f"  Date: {booking.date:%Y-%m-%d %H:%M}")
    click.echo(f"  Category: {booking.category.value}")
    if booking.platform:
        click.echo(f"  Platform: {booking.platform}")
    click.echo(f"  Status: {booking.status.value}")
    click.echo(f"  Base pay: {format_money(booking.base_pay)}")
    click.echo(f"  Commission: {format_money(booking.commission_amount)}")
    click.echo(f"  Markup: {format_money(booking.markup_amount)}")
    click.echo(f"  Revenue: {format_money(booking.total_revenue)}")

    summary = service.customer_summary(booking.customer_name)
    if summary is not None and summary.booking_count > 1:
        click.echo(
            f"  Customer history: {summary.booking_count} bookings, "
            f"{format_money(summary.total_revenue)} revenue"
        )


@booking_group.command("status")
@click.argument("booking_id")
@click.argument("status")
@click.pass_context
def set_status(ctx, booking_id: str, status: str):
    """Change a booking's status (pending, confirmed or cancelled)."""
    service: BookingService = ctx.obj["bookings"]
    try:
        booking = service.set_status(booking_id, status)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if booking is None:
        click.echo(f"No booking with ID {booking_id}; nothing changed.")
        return
    first_name = booking.customer_name.split(" ")[0]
    click.echo(f"{first_name}'s booking is now {booking.status.value}")
    warn_if_unsaved(service)


@booking_group.command("remove")
@click.argument("booking_id")
@click.pass_context
def remove_booking(ctx, booking_id: str):
    """Delete a booking."""
    service: BookingService = ctx.obj["bookings"]
    if service.remove_booking(booking_id):
        click.echo(f"Removed booking {booking_id}")
        warn_if_unsaved(service)
    else:
        click.echo(f"No booking with ID {booking_id}; nothing removed.")


@booking_group.command("stats")
@click.pass_context
def booking_stats(ctx):
    """Show booking counts and totals."""
    service: BookingService = ctx.obj["bookings"]
    stats = service.get_stats()
    click.echo(f"Total bookings: {stats.total}")
    click.echo(f"  Pending: {stats.pending}")
    click.echo(f"  Confirmed: {stats.confirmed}")
    click.echo(f"  Cancelled: {stats.cancelled}")
    click.echo(f"Total revenue: {format_money(stats.total_revenue)}")
    click.echo(f"Total base pay: {format_money(stats.total_base_pay)}")


def register_commands(cli):
    """Register booking commands with main CLI."""
    cli.add_command(booking_group)
