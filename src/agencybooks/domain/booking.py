"""Booking domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping, Optional

from agencybooks.domain.booking_validator import validate_booking
from agencybooks.domain.entities import (
    Booking,
    BookingStats,
    BookingStatus,
    CustomerSummary,
)
from agencybooks.domain.errors import InvalidStatusError
from agencybooks.domain.store import SnapshotStore
from agencybooks.utils.clock import Clock, SystemClock
from agencybooks.utils.ids import IdGenerator, UuidIdGenerator
from agencybooks.utils.logging import get_logger

if TYPE_CHECKING:
    from agencybooks.database.base import Database

LOGGER = get_logger(__name__)


def _parse_status(status: Any) -> BookingStatus:
    if isinstance(status, BookingStatus):
        return status
    try:
        return BookingStatus(str(status).strip().lower())
    except ValueError:
        raise InvalidStatusError(status) from None


class BookingService(SnapshotStore):
    """Service owning the booking collection."""

    def __init__(
        self,
        db: "Database",
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        """Initialize booking service and load stored bookings.

        Args:
            db: Database instance
            clock: Time source for creation stamps
            id_generator: Source of booking ids
        """
        super().__init__()
        self.db = db
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidIdGenerator()
        self._bookings: list[Booking] = list(db.load_bookings())
        LOGGER.debug("Loaded %d bookings", len(self._bookings))

    def _persist(self) -> None:
        snapshot = list(self._bookings)
        self._save("bookings", lambda: self.db.replace_bookings(snapshot))

    def add_booking(self, raw: Mapping[str, Any]) -> Booking:
        """Validate a submission and insert the resulting booking.

        Args:
            raw: Raw booking fields

        Returns:
            The created Booking

        Raises:
            ValidationError: If the submission is invalid; nothing is inserted
        """
        booking = validate_booking(raw, id_generator=self.id_generator, clock=self.clock)
        with self._lock:
            self._bookings.append(booking)
            self._persist()
        LOGGER.info(
            "Added booking %s for %s (revenue %s)",
            booking.id,
            booking.customer_name,
            booking.total_revenue,
        )
        return booking

    def remove_booking(self, booking_id: str) -> bool:
        """Delete a booking.

        Returns:
            True if a booking was removed, False if the id was unknown
        """
        with self._lock:
            remaining = [b for b in self._bookings if b.id != booking_id]
            if len(remaining) == len(self._bookings):
                return False
            self._bookings = remaining
            self._persist()
        LOGGER.info("Removed booking %s", booking_id)
        return True

    def set_status(self, booking_id: str, status: BookingStatus | str) -> Optional[Booking]:
        """Move a booking to ``status``.

        Any status may follow any other, so cancelled bookings can be reopened.

        Returns:
            The updated booking, or None if the id was unknown

        Raises:
            InvalidStatusError: If ``status`` is not a booking status
        """
        new_status = _parse_status(status)
        with self._lock:
            for index, booking in enumerate(self._bookings):
                if booking.id == booking_id:
                    updated = replace(booking, status=new_status)
                    self._bookings[index] = updated
                    self._persist()
                    break
            else:
                return None
        LOGGER.info("Booking %s is now %s", booking_id, new_status.value)
        return updated

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID."""
        with self._lock:
            for booking in self._bookings:
                if booking.id == booking_id:
                    return booking
        return None

    def snapshot(self) -> list[Booking]:
        """Return the bookings in insertion order."""
        with self._lock:
            return list(self._bookings)

    def list_bookings(
        self,
        status: Optional[BookingStatus | str] = None,
        search: Optional[str] = None,
    ) -> list[Booking]:
        """List bookings, newest date first.

        Args:
            status: Optional status filter
            search: Optional case-insensitive match on customer name or id

        Returns:
            List of bookings
        """
        wanted = _parse_status(status) if status is not None else None
        needle = search.strip().lower() if search else ""

        results = []
        for booking in self.snapshot():
            if wanted is not None and booking.status != wanted:
                continue
            if needle and needle not in booking.customer_name.lower() and needle not in booking.id.lower():
                continue
            results.append(booking)
        return sorted(results, key=lambda b: b.date, reverse=True)

    def get_stats(self) -> BookingStats:
        """Counts per status plus revenue and base pay totals."""
        bookings = self.snapshot()
        total = len(bookings)
        pending = sum(1 for b in bookings if b.status == BookingStatus.PENDING)
        confirmed = sum(1 for b in bookings if b.status == BookingStatus.CONFIRMED)
        return BookingStats(
            total=total,
            pending=pending,
            confirmed=confirmed,
            cancelled=total - pending - confirmed,
            total_revenue=sum((b.total_revenue for b in bookings), Decimal("0.00")),
            total_base_pay=sum((b.base_pay for b in bookings), Decimal("0.00")),
        )

    def customer_summary(self, customer_name: str) -> Optional[CustomerSummary]:
        """Booking history for a customer, matched by name ignoring case.

        Returns:
            CustomerSummary or None if the customer has no bookings
        """
        name = customer_name.strip().lower()
        history = tuple(
            sorted(
                (b for b in self.snapshot() if b.customer_name.lower() == name),
                key=lambda b: (b.date, b.created_at),
                reverse=True,
            )
        )
        if not history:
            return None
        return CustomerSummary(
            customer_name=history[0].customer_name,
            bookings=history,
            booking_count=len(history),
            total_revenue=sum((b.total_revenue for b in history), Decimal("0.00")),
            latest_booking=history[0],
        )
