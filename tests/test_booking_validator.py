"""Tests for booking submission validation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from agencybooks.domain.booking_validator import validate_booking
from agencybooks.domain.entities import BookingCategory, BookingStatus
from agencybooks.domain.errors import ValidationError
from agencybooks.utils.clock import FixedClock
from agencybooks.utils.ids import SequentialIdGenerator

CREATED = datetime(2026, 10, 18, 9, 30)


def _validate(raw):
    return validate_booking(raw, id_generator=SequentialIdGenerator(), clock=FixedClock(CREATED))


def _field_error(raw) -> str:
    with pytest.raises(ValidationError) as excinfo:
        _validate(raw)
    return excinfo.value.field


def test_empty_customer_name_is_rejected_first():
    raw = {
        "customerName": "",
        "email": "a@b.com",
        "contactNumber": "1234567890",
        "date": date(2026, 10, 18),
        "category": "bus",
    }
    assert _field_error(raw) == "customer_name"


def test_whitespace_customer_name_is_rejected(booking_fields):
    assert _field_error(booking_fields(customer_name="   ")) == "customer_name"


def test_camel_case_submission_is_normalized():
    booking = _validate(
        {
            "customerName": "  Asha ",
            "email": " ASHA@X.com ",
            "contactNumber": "98765-43210",
            "date": "2026-10-18",
            "category": "flight",
            "platform": "direct",
            "commissionAmount": 200,
            "markupAmount": 50,
        }
    )

    assert booking.customer_name == "Asha"
    assert booking.email == "asha@x.com"
    assert booking.contact_number == "9876543210"
    assert booking.total_revenue == Decimal("250.00")
    assert booking.base_pay == Decimal("0.00")
    assert booking.status == BookingStatus.PENDING
    assert booking.category == BookingCategory.FLIGHT
    assert booking.date == datetime(2026, 10, 18)
    assert booking.created_at == CREATED
    assert booking.id == "BK0001"


@pytest.mark.parametrize("email", ["", "asha", "asha@x", "asha @x.com", None])
def test_bad_email_is_rejected(booking_fields, email):
    assert _field_error(booking_fields(email=email)) == "email"


@pytest.mark.parametrize("contact", ["", "12345", "98765432101", "98765abcde", None])
def test_bad_contact_number_is_rejected(booking_fields, contact):
    assert _field_error(booking_fields(contact_number=contact)) == "contact_number"


def test_contact_number_separators_are_stripped(booking_fields):
    booking = _validate(booking_fields(contact_number="(987) 654 32.10"))
    assert booking.contact_number == "9876543210"


@pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
def test_missing_or_bad_date_is_rejected(booking_fields, value):
    assert _field_error(booking_fields(date=value)) == "date"


@pytest.mark.parametrize("field", ["base_pay", "commission_amount", "markup_amount"])
def test_negative_amounts_are_rejected(booking_fields, field):
    with pytest.raises(ValidationError) as excinfo:
        _validate(booking_fields(**{field: "-1"}))
    assert excinfo.value.field == field
    assert "negative" in excinfo.value.reason


def test_non_numeric_amount_is_rejected(booking_fields):
    assert _field_error(booking_fields(markup_amount="lots")) == "markup_amount"


def test_unknown_category_is_rejected(booking_fields):
    assert _field_error(booking_fields(category="ship")) == "category"


def test_missing_category_is_rejected(booking_fields):
    fields = booking_fields()
    del fields["category"]
    assert _field_error(fields) == "category"


def test_unknown_status_is_rejected(booking_fields):
    assert _field_error(booking_fields(status="archived")) == "status"


@pytest.mark.parametrize("category", ["flight", "hotel", "cab"])
def test_platform_required_for_third_party_channels(booking_fields, category):
    assert _field_error(booking_fields(category=category, platform="  ")) == "platform"


@pytest.mark.parametrize("category", ["bus", "train"])
def test_platform_optional_for_other_categories(booking_fields, category):
    booking = _validate(booking_fields(category=category, platform=None))
    assert booking.platform is None


def test_rules_are_checked_in_order(booking_fields):
    # Both email and category are bad; email comes first
    raw = booking_fields(email="nope", category="ship")
    assert _field_error(raw) == "email"


def test_revenue_is_rounded_to_cents(booking_fields):
    booking = _validate(booking_fields(commission_amount="0.105", markup_amount="0.2"))
    assert booking.commission_amount == Decimal("0.11")
    assert booking.total_revenue == Decimal("0.31")


def test_float_amounts_keep_decimal_precision(booking_fields):
    booking = _validate(booking_fields(commission_amount=0.1, markup_amount=0.2))
    assert booking.total_revenue == Decimal("0.30")


def test_error_message_names_field(booking_fields):
    with pytest.raises(ValidationError) as excinfo:
        _validate(booking_fields(customer_name=""))
    assert str(excinfo.value) == "customer_name: Customer name is required"
    assert isinstance(excinfo.value, ValueError)


def test_enum_members_are_accepted(booking_fields):
    booking = _validate(
        booking_fields(category=BookingCategory.BUS, platform=None, status=BookingStatus.CONFIRMED)
    )
    assert booking.category == BookingCategory.BUS
    assert booking.status == BookingStatus.CONFIRMED


def test_relative_date_follows_clock(booking_fields):
    booking = _validate(booking_fields(date="yesterday"))
    assert booking.date == datetime(2026, 10, 17)
