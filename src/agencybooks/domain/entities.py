"""Domain model entities for agencybooks.

These are pure data classes representing business concepts, independent of
database schema. Money amounts are two-place Decimals throughout.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class BookingCategory(str, Enum):
    """Kinds of travel service a booking can be for."""

    FLIGHT = "flight"
    BUS = "bus"
    TRAIN = "train"
    CAB = "cab"
    HOTEL = "hotel"

    @property
    def requires_platform(self) -> bool:
        """Third-party channels must record the platform they were sold on."""
        return self in (BookingCategory.FLIGHT, BookingCategory.HOTEL, BookingCategory.CAB)


class BookingStatus(str, Enum):
    """Booking lifecycle states; any state may move to any other."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class LedgerOperation(str, Enum):
    """Direction of a wallet ledger entry."""

    CREDIT = "credit"
    DEBIT = "debit"


class Granularity(str, Enum):
    """Bucket size for aggregation series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def bucket_count(self) -> int:
        """Number of buckets in the look-back window."""
        return _BUCKET_COUNTS[self]

    @classmethod
    def parse(cls, value: "Granularity | str") -> "Granularity":
        """Coerce a granularity name, ignoring case.

        Raises:
            ValueError: If the name is not a known granularity
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ValueError(
                f"Unknown granularity: '{value}'. "
                f"Supported: {', '.join(g.value for g in cls)}"
            ) from e


_BUCKET_COUNTS = {
    Granularity.DAILY: 7,
    Granularity.WEEKLY: 4,
    Granularity.MONTHLY: 12,
    Granularity.YEARLY: 3,
}


class EventKind(str, Enum):
    """Which side of the profit calculation a money event lands on."""

    REVENUE = "revenue"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Booking:
    """Booking domain entity. Only ``status`` changes after creation."""

    id: str
    customer_name: str
    email: str
    contact_number: str
    date: datetime
    category: BookingCategory
    created_at: datetime
    base_pay: Decimal = Decimal("0.00")
    commission_amount: Decimal = Decimal("0.00")
    markup_amount: Decimal = Decimal("0.00")
    total_revenue: Decimal = Decimal("0.00")
    platform: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING


@dataclass(frozen=True)
class WalletAccount:
    """Named cash pool."""

    key: str
    name: str
    balance: Decimal
    initial_balance: Decimal


@dataclass(frozen=True)
class LedgerEntry:
    """Append-only record of one credit or debit; amount is always positive."""

    id: str
    wallet_key: str
    amount: Decimal
    operation: LedgerOperation
    actor: str
    timestamp: datetime


@dataclass(frozen=True)
class Expense:
    """Categorized outgoing cost."""

    id: str
    description: str
    amount: Decimal
    category: str
    date: datetime


@dataclass(frozen=True)
class BookingStats:
    """Aggregate counts and sums over the booking collection."""

    total: int
    pending: int
    confirmed: int
    cancelled: int
    total_revenue: Decimal
    total_base_pay: Decimal


@dataclass(frozen=True)
class CustomerSummary:
    """Booking history for one customer."""

    customer_name: str
    bookings: tuple[Booking, ...]
    booking_count: int
    total_revenue: Decimal
    latest_booking: Booking


@dataclass(frozen=True)
class MoneyEvent:
    """A dated amount feeding the period aggregator."""

    date: datetime
    amount: Decimal
    kind: EventKind


@dataclass(frozen=True)
class PeriodBucket:
    """One point in an aggregation series."""

    label: str
    period_start: datetime
    revenue: Decimal
    expense: Decimal
    profit: Decimal


@dataclass(frozen=True)
class RankedEntity:
    """A named amount, used for top-N and category rollups."""

    name: str
    amount: Decimal


@dataclass(frozen=True)
class Trend:
    """Percentage change between two values.

    ``percent`` is None when the previous value was zero; see ``NO_TREND``.
    """

    percent: Optional[Decimal]
    is_positive: bool

    @property
    def available(self) -> bool:
        return self.percent is not None

    @property
    def label(self) -> str:
        if self.percent is None:
            return "N/A"
        sign = "+" if self.percent >= 0 else ""
        return f"{sign}{self.percent}%"


NO_TREND = Trend(percent=None, is_positive=False)


@dataclass(frozen=True)
class SeriesSummary:
    """Cross-bucket statistics for an aggregation series."""

    total_revenue: Decimal
    total_expense: Decimal
    total_profit: Decimal
    average_revenue: Decimal
    highest: Optional[PeriodBucket]
    lowest: Optional[PeriodBucket]
    trend: Trend


@dataclass(frozen=True)
class PeriodStats:
    """Booking and expense figures for one calendar period."""

    start: datetime
    end: datetime
    booking_count: int
    revenue: Decimal
    average_booking: Decimal
    highest_booking: Decimal
    expenses: Decimal
    profit: Decimal


@dataclass(frozen=True)
class PeriodComparison:
    """Current vs previous period with a trend per metric."""

    current: PeriodStats
    previous: PeriodStats
    bookings_trend: Trend
    revenue_trend: Trend
    average_trend: Trend
    highest_trend: Trend
    expenses_trend: Trend
    profit_trend: Trend


@dataclass(frozen=True)
class ReportRow:
    """Flattened export row; bookings positive, expenses negative."""

    kind: str
    date: datetime
    description: str
    amount: Decimal
    category: str
