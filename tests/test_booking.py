"""Tests for the booking service."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from agencybooks.domain.booking import BookingService
from agencybooks.domain.entities import BookingCategory, BookingStatus
from agencybooks.domain.errors import InvalidStatusError, ValidationError


def test_add_booking_stores_validated_record(booking_service, booking_fields, memory_db):
    booking = booking_service.add_booking(booking_fields(email="ASHA@X.com"))

    assert booking.email == "asha@x.com"
    assert booking.total_revenue == Decimal("250.00")
    assert booking_service.get_booking(booking.id) == booking
    assert memory_db.bookings == [booking]


def test_invalid_booking_is_not_inserted(booking_service, booking_fields, memory_db):
    with pytest.raises(ValidationError):
        booking_service.add_booking(booking_fields(contact_number="123"))

    assert booking_service.snapshot() == []
    assert memory_db.save_count == 0


def test_booking_ids_are_unique(booking_service, booking_fields):
    ids = {booking_service.add_booking(booking_fields()).id for _ in range(5)}
    assert len(ids) == 5


def test_remove_booking(booking_service, booking_fields):
    booking = booking_service.add_booking(booking_fields())

    assert booking_service.remove_booking(booking.id) is True
    assert booking_service.get_booking(booking.id) is None


def test_remove_unknown_booking_is_noop(booking_service, booking_fields):
    booking_service.add_booking(booking_fields())

    assert booking_service.remove_booking("BK9999") is False
    assert len(booking_service.snapshot()) == 1


def test_set_status_allows_any_transition(booking_service, booking_fields):
    booking = booking_service.add_booking(booking_fields())

    for status in ("confirmed", "cancelled", "pending", "cancelled", "confirmed", "pending"):
        updated = booking_service.set_status(booking.id, status)
        assert updated.status == BookingStatus(status)

    assert booking_service.get_booking(booking.id).status == BookingStatus.PENDING


def test_set_status_only_changes_status(booking_service, booking_fields):
    booking = booking_service.add_booking(booking_fields())
    updated = booking_service.set_status(booking.id, BookingStatus.CONFIRMED)

    assert updated.total_revenue == booking.total_revenue
    assert updated.created_at == booking.created_at
    assert updated.id == booking.id


def test_set_status_rejects_unknown_status(booking_service, booking_fields):
    booking = booking_service.add_booking(booking_fields())

    with pytest.raises(InvalidStatusError):
        booking_service.set_status(booking.id, "archived")
    assert booking_service.get_booking(booking.id).status == BookingStatus.PENDING


def test_set_status_unknown_id_returns_none(booking_service):
    assert booking_service.set_status("BK9999", "confirmed") is None


def test_unknown_status_checked_before_lookup(booking_service):
    with pytest.raises(InvalidStatusError):
        booking_service.set_status("BK9999", "archived")


def test_stats_partition_statuses(booking_service, booking_fields):
    first = booking_service.add_booking(booking_fields())
    second = booking_service.add_booking(booking_fields(commission_amount="100", markup_amount="0"))
    booking_service.add_booking(booking_fields(base_pay="500", status="confirmed"))
    booking_service.set_status(first.id, "cancelled")
    booking_service.set_status(second.id, "confirmed")

    stats = booking_service.get_stats()

    assert stats.total == 3
    assert stats.pending == 0
    assert stats.confirmed == 2
    assert stats.cancelled == 1
    assert stats.pending + stats.confirmed + stats.cancelled == stats.total
    assert stats.total_revenue == Decimal("600.00")
    assert stats.total_base_pay == Decimal("2500.00")


def test_stats_on_empty_store(booking_service):
    stats = booking_service.get_stats()
    assert stats.total == stats.pending == stats.confirmed == stats.cancelled == 0
    assert stats.total_revenue == Decimal("0")


def test_list_bookings_filters_and_orders(booking_service, booking_fields):
    base = datetime(2026, 10, 1)
    old = booking_service.add_booking(booking_fields(customer_name="Ravi", date=base))
    new = booking_service.add_booking(
        booking_fields(customer_name="Asha", date=base + timedelta(days=3))
    )
    booking_service.set_status(old.id, "confirmed")

    assert [b.id for b in booking_service.list_bookings()] == [new.id, old.id]
    assert booking_service.list_bookings(status="confirmed") == [
        booking_service.get_booking(old.id)
    ]
    assert [b.id for b in booking_service.list_bookings(search="asha")] == [new.id]
    assert [b.id for b in booking_service.list_bookings(search=old.id.lower())] == [old.id]


def test_customer_summary(booking_service, booking_fields):
    base = datetime(2026, 10, 1)
    booking_service.add_booking(booking_fields(customer_name="Asha", date=base))
    latest = booking_service.add_booking(
        booking_fields(customer_name="Asha", date=base + timedelta(days=2), markup_amount="100")
    )
    booking_service.add_booking(booking_fields(customer_name="Ravi", date=base))

    summary = booking_service.customer_summary("asha")

    assert summary.booking_count == 2
    assert summary.total_revenue == Decimal("550.00")
    assert summary.latest_booking == latest
    assert booking_service.customer_summary("Nobody") is None


def test_bookings_reload_from_database(memory_db, clock, id_generator, booking_fields):
    service = BookingService(memory_db, clock=clock, id_generator=id_generator)
    booking = service.add_booking(booking_fields())

    reloaded = BookingService(memory_db, clock=clock, id_generator=id_generator)

    assert reloaded.get_booking(booking.id) == booking


def test_failed_save_keeps_change_and_reports(booking_service, booking_fields, memory_db):
    memory_db.fail_saves = True

    booking = booking_service.add_booking(booking_fields())

    assert booking_service.get_booking(booking.id) == booking
    assert booking_service.last_save_error is not None
    assert memory_db.bookings == []

    memory_db.fail_saves = False
    booking_service.set_status(booking.id, "confirmed")
    assert booking_service.last_save_error is None
    assert memory_db.bookings[0].status == BookingStatus.CONFIRMED


def test_add_booking_with_enum_values(booking_service, booking_fields):
    booking = booking_service.add_booking(
        booking_fields(category=BookingCategory.HOTEL, status=BookingStatus.CANCELLED)
    )
    assert booking.category == BookingCategory.HOTEL
    assert booking.status == BookingStatus.CANCELLED
    assert booking_service.get_stats().cancelled == 1


def test_relative_booking_date_uses_service_clock(booking_service, booking_fields, clock):
    booking = booking_service.add_booking(booking_fields(date="today"))
    assert booking.date == datetime.combine(clock.now().date(), datetime.min.time())
