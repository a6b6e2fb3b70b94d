"""Period aggregation over dated money events.

``aggregate`` lays out every bucket of the look-back window first and only
then folds events into them, so days, weeks, months or years without
activity still appear as zero rows. Buckets come back oldest first.

Bucket boundaries are half-open, ``[period_start, next_period_start)``; the
window as a whole is closed at ``window_end`` so an event stamped exactly at
``window_end`` lands in the last bucket.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Optional, Sequence, TypeVar, Union

from dateutil.relativedelta import relativedelta

from agencybooks.domain.entities import (
    NO_TREND,
    Booking,
    EventKind,
    Expense,
    Granularity,
    MoneyEvent,
    PeriodBucket,
    RankedEntity,
    SeriesSummary,
    Trend,
)
from agencybooks.utils.amount_parser import round_money
from agencybooks.utils.date_parser import end_of_day, to_datetime

ZERO = Decimal("0.00")

T = TypeVar("T")


def period_start(moment: datetime, granularity: Granularity) -> datetime:
    """Truncate a datetime to the start of its bucket.

    Weeks start on Monday (ISO weeks).
    """
    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if granularity == Granularity.DAILY:
        return day
    if granularity == Granularity.WEEKLY:
        return day - timedelta(days=day.weekday())
    if granularity == Granularity.MONTHLY:
        return day.replace(day=1)
    if granularity == Granularity.YEARLY:
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown granularity: {granularity!r}")


def step(granularity: Granularity, count: int = 1) -> Union[timedelta, relativedelta]:
    """Length of ``count`` buckets."""
    if granularity == Granularity.DAILY:
        return timedelta(days=count)
    if granularity == Granularity.WEEKLY:
        return timedelta(weeks=count)
    if granularity == Granularity.MONTHLY:
        return relativedelta(months=count)
    if granularity == Granularity.YEARLY:
        return relativedelta(years=count)
    raise ValueError(f"Unknown granularity: {granularity!r}")


def bucket_label(start: datetime, granularity: Granularity) -> str:
    """Chart label for a bucket starting at ``start``."""
    if granularity == Granularity.DAILY:
        return f"{start:%b} {start.day}"
    if granularity == Granularity.WEEKLY:
        iso_year, iso_week, _ = start.isocalendar()
        return f"W{iso_week} {iso_year}"
    if granularity == Granularity.MONTHLY:
        return start.strftime("%b %Y")
    return start.strftime("%Y")


def window_bounds(
    granularity: Granularity | str, window_end: Union[date, datetime]
) -> tuple[datetime, datetime]:
    """Return ``(window_start, window_end)`` for a granularity.

    A plain date as ``window_end`` covers that whole day.
    """
    granularity = Granularity.parse(granularity)
    end = end_of_day(window_end)
    start = period_start(end, granularity) - step(granularity, granularity.bucket_count - 1)
    return start, end


def events_from(
    bookings: Iterable[Booking] = (), expenses: Iterable[Expense] = ()
) -> list[MoneyEvent]:
    """Turn bookings into revenue events and expenses into expense events."""
    events = [
        MoneyEvent(date=b.date, amount=b.total_revenue, kind=EventKind.REVENUE)
        for b in bookings
    ]
    events.extend(
        MoneyEvent(date=e.date, amount=e.amount, kind=EventKind.EXPENSE) for e in expenses
    )
    return events


def aggregate(
    events: Iterable[MoneyEvent],
    granularity: Granularity | str,
    window_end: Union[date, datetime],
) -> list[PeriodBucket]:
    """Fold money events into a gap-free, oldest-first bucket series.

    Args:
        events: Revenue and expense events; those outside the window are ignored
        granularity: daily (7 buckets), weekly (4), monthly (12) or yearly (3)
        window_end: Inclusive end of the window

    Returns:
        List of PeriodBucket, one per period in the window

    Raises:
        ValueError: If granularity is unknown
    """
    granularity = Granularity.parse(granularity)
    window_start, window_end = window_bounds(granularity, window_end)

    revenue: dict[datetime, Decimal] = {}
    expense: dict[datetime, Decimal] = {}
    for index in range(granularity.bucket_count):
        start = window_start + step(granularity, index)
        revenue[start] = ZERO
        expense[start] = ZERO

    for event in events:
        moment = to_datetime(event.date)
        if moment < window_start or moment > window_end:
            continue
        key = period_start(moment, granularity)
        if event.kind == EventKind.REVENUE:
            revenue[key] += event.amount
        else:
            expense[key] += event.amount

    return [
        PeriodBucket(
            label=bucket_label(start, granularity),
            period_start=start,
            revenue=revenue[start],
            expense=expense[start],
            profit=revenue[start] - expense[start],
        )
        for start in sorted(revenue)
    ]


def top_entities(
    bookings: Iterable[Booking],
    key_fn: Callable[[Booking], Optional[str]],
    limit: int = 5,
) -> list[RankedEntity]:
    """Sum booking revenue per extracted key and return the largest groups.

    Ties keep the order in which keys were first encountered. Bookings whose
    key is None or blank are grouped under "Unknown".
    """
    totals: dict[str, Decimal] = {}
    for booking in bookings:
        name = (key_fn(booking) or "").strip() or "Unknown"
        totals[name] = totals.get(name, ZERO) + booking.total_revenue
    ranked = sorted(
        (RankedEntity(name=name, amount=amount) for name, amount in totals.items()),
        key=lambda r: r.amount,
        reverse=True,
    )
    return ranked[: max(limit, 0)]


def calculate_trend(current: Decimal | int, previous: Decimal | int) -> Trend:
    """Percentage change from ``previous`` to ``current``.

    Returns NO_TREND when ``previous`` is zero.
    """
    current = Decimal(current)
    previous = Decimal(previous)
    if previous == 0:
        return NO_TREND
    change = (current - previous) / abs(previous) * 100
    percent = change.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return Trend(percent=percent, is_positive=change >= 0)


def _first_extreme(
    items: Sequence[T], key: Callable[[T], Decimal], better: Callable[[Decimal, Decimal], bool]
) -> Optional[T]:
    best: Optional[T] = None
    for item in items:
        if best is None or better(key(item), key(best)):
            best = item
    return best


def summarize_series(buckets: Sequence[PeriodBucket]) -> SeriesSummary:
    """Totals, average, extrema and latest trend for a bucket series."""
    total_revenue = sum((b.revenue for b in buckets), ZERO)
    total_expense = sum((b.expense for b in buckets), ZERO)
    average = round_money(total_revenue / len(buckets)) if buckets else ZERO

    trend = NO_TREND
    if len(buckets) >= 2:
        trend = calculate_trend(buckets[-1].revenue, buckets[-2].revenue)

    return SeriesSummary(
        total_revenue=total_revenue,
        total_expense=total_expense,
        total_profit=total_revenue - total_expense,
        average_revenue=average,
        highest=_first_extreme(buckets, lambda b: b.revenue, lambda a, b: a > b),
        lowest=_first_extreme(buckets, lambda b: b.revenue, lambda a, b: a < b),
        trend=trend,
    )

