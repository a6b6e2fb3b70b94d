"""Reporting domain service.

Read-only views that combine booking and expense snapshots: period series,
top revenue sources, month-over-month comparison and the flattened export.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from agencybooks.domain.aggregation import (
    aggregate,
    calculate_trend,
    events_from,
    period_start,
    summarize_series,
    top_entities,
)
from agencybooks.domain.booking import BookingService
from agencybooks.domain.entities import (
    Booking,
    Expense,
    Granularity,
    PeriodBucket,
    PeriodComparison,
    PeriodStats,
    RankedEntity,
    ReportRow,
    SeriesSummary,
)
from agencybooks.domain.expense import ExpenseService
from agencybooks.utils.amount_parser import round_money
from agencybooks.utils.clock import Clock, SystemClock

ZERO = Decimal("0.00")

# Extraction keys for top_revenue_sources
TOP_KEYS: dict[str, Callable[[Booking], Optional[str]]] = {
    "customer": lambda b: b.customer_name,
    "platform": lambda b: b.platform,
    "category": lambda b: b.category.value,
}


class ReportService:
    """Service for building dashboard reports."""

    def __init__(
        self,
        bookings: BookingService,
        expenses: ExpenseService,
        clock: Optional[Clock] = None,
    ):
        """Initialize reporting service.

        Args:
            bookings: Booking service to read from
            expenses: Expense service to read from
            clock: Time source for the default window end
        """
        self.bookings = bookings
        self.expenses = expenses
        self.clock = clock or SystemClock()

    def revenue_series(
        self, granularity: Granularity | str, window_end: Optional[date | datetime] = None
    ) -> list[PeriodBucket]:
        """Revenue, expense and profit per bucket for the look-back window."""
        events = events_from(self.bookings.snapshot(), self.expenses.snapshot())
        return aggregate(events, granularity, window_end or self.clock.now())

    def series_summary(
        self, granularity: Granularity | str, window_end: Optional[date | datetime] = None
    ) -> SeriesSummary:
        return summarize_series(self.revenue_series(granularity, window_end))

    def top_revenue_sources(self, by: str = "customer", limit: int = 5) -> list[RankedEntity]:
        """Largest revenue groups by customer, platform or category.

        Raises:
            ValueError: If ``by`` is not a supported key
        """
        try:
            key_fn = TOP_KEYS[by]
        except KeyError:
            raise ValueError(
                f"Unknown grouping '{by}'. Supported: {', '.join(TOP_KEYS)}"
            ) from None
        return top_entities(self.bookings.snapshot(), key_fn, limit)

    def revenue_to_date(self, now: Optional[datetime] = None) -> dict[Granularity, Decimal]:
        """Revenue since the start of the current day, week, month and year."""
        now = now or self.clock.now()
        bookings = self.bookings.snapshot()
        totals = {}
        for granularity in Granularity:
            start = period_start(now, granularity)
            totals[granularity] = sum(
                (b.total_revenue for b in bookings if start <= b.date <= now), ZERO
            )
        return totals

    def compare_periods(self, now: Optional[datetime] = None) -> PeriodComparison:
        """Current calendar month against the previous one."""
        now = now or self.clock.now()
        current_start = period_start(now, Granularity.MONTHLY)
        previous_start = current_start - relativedelta(months=1)

        current = self._period_stats(current_start, current_start + relativedelta(months=1))
        previous = self._period_stats(previous_start, current_start)

        return PeriodComparison(
            current=current,
            previous=previous,
            bookings_trend=calculate_trend(current.booking_count, previous.booking_count),
            revenue_trend=calculate_trend(current.revenue, previous.revenue),
            average_trend=calculate_trend(current.average_booking, previous.average_booking),
            highest_trend=calculate_trend(current.highest_booking, previous.highest_booking),
            expenses_trend=calculate_trend(current.expenses, previous.expenses),
            profit_trend=calculate_trend(current.profit, previous.profit),
        )

    def _period_stats(self, start: datetime, end: datetime) -> PeriodStats:
        """Stats over ``[start, end)``; ``end`` is reported as the last day."""
        bookings = [b for b in self.bookings.snapshot() if start <= b.date < end]
        expenses = [e for e in self.expenses.snapshot() if start <= e.date < end]

        revenue = sum((b.total_revenue for b in bookings), ZERO)
        spent = sum((e.amount for e in expenses), ZERO)
        count = len(bookings)
        return PeriodStats(
            start=start,
            end=datetime.combine((end - timedelta(days=1)).date(), time.max),
            booking_count=count,
            revenue=revenue,
            average_booking=round_money(revenue / count) if count else ZERO,
            highest_booking=max((b.total_revenue for b in bookings), default=ZERO),
            expenses=spent,
            profit=revenue - spent,
        )

    def export_rows(self) -> list[ReportRow]:
        """Bookings and expenses merged in date order."""
        return build_export_rows(self.bookings.snapshot(), self.expenses.snapshot())


def build_export_rows(
    bookings: Sequence[Booking], expenses: Sequence[Expense]
) -> list[ReportRow]:
    """Flatten bookings (positive) and expenses (negative) into report rows.

    Rows on the same date keep bookings before expenses, each in input order.
    """
    rows = [
        ReportRow(
            kind="Booking",
            date=b.date,
            description=b.customer_name,
            amount=b.total_revenue,
            category=b.category.value,
        )
        for b in bookings
    ]
    rows.extend(
        ReportRow(
            kind="Expense",
            date=e.date,
            description=e.description,
            amount=-e.amount,
            category=e.category,
        )
        for e in expenses
    )
    return sorted(rows, key=lambda r: r.date)
