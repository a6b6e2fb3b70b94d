"""Booking submission validation.

``validate_booking`` turns a raw form submission into a canonical Booking.
Rules are checked in a fixed order and the first failure is raised, so the
reported field is deterministic for a given input.
"""

import re
from decimal import Decimal
from typing import Any, Mapping, Optional

from agencybooks.domain.entities import Booking, BookingCategory, BookingStatus
from agencybooks.domain.errors import ValidationError
from agencybooks.utils.amount_parser import round_money, to_money
from agencybooks.utils.clock import Clock
from agencybooks.utils.date_parser import to_datetime
from agencybooks.utils.ids import BOOKING_PREFIX, IdGenerator

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
CONTACT_SEPARATORS = re.compile(r"[\s\-().]")

# Form keys as submitted by the dashboard
FIELD_ALIASES = {
    "customerName": "customer_name",
    "contactNumber": "contact_number",
    "basePay": "base_pay",
    "commissionAmount": "commission_amount",
    "markupAmount": "markup_amount",
}

MONEY_FIELDS = ("base_pay", "commission_amount", "markup_amount")


def normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase form keys onto snake_case field names."""
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        normalized[FIELD_ALIASES.get(key, key)] = value
    return normalized


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _require_text(fields: Mapping[str, Any], name: str, label: str) -> str:
    value = _text(fields.get(name))
    if not value:
        raise ValidationError(name, f"{label} is required")
    return value


def validate_email(value: Any) -> str:
    """Trim and lower-case an email, checking the local@domain shape."""
    email = _text(value).lower()
    if not email or not EMAIL_PATTERN.match(email):
        raise ValidationError("email", "Valid email is required")
    return email


def validate_contact_number(value: Any) -> str:
    """Return the ten contact digits with separators stripped."""
    contact = _text(value)
    if not contact:
        raise ValidationError("contact_number", "Contact number is required")
    digits = CONTACT_SEPARATORS.sub("", contact)
    if not re.fullmatch(r"\d{10}", digits):
        raise ValidationError("contact_number", "Contact number must be 10 digits")
    return digits


def validate_money(fields: Mapping[str, Any], name: str) -> Decimal:
    """Parse a non-negative amount; missing values count as zero."""
    try:
        amount = to_money(fields.get(name))
    except ValueError:
        raise ValidationError(name, "must be a number") from None
    if amount < 0:
        raise ValidationError(name, "cannot be negative")
    return amount


def _parse_enum(enum_cls, value: Any, field: str, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(_text(value).lower())
    except ValueError:
        raise ValidationError(field, f"Invalid {label} '{value}'") from None


def validate_booking(
    raw: Mapping[str, Any], *, id_generator: IdGenerator, clock: Clock
) -> Booking:
    """Validate and normalize a raw booking submission.

    Args:
        raw: Submitted fields; snake_case or the dashboard's camelCase keys
        id_generator: Source of the new booking id
        clock: Source of the ``created_at`` stamp and of "today" for
            relative dates

    Returns:
        Canonical Booking with ``total_revenue`` computed

    Raises:
        ValidationError: For the first rule the submission violates
    """
    fields = normalize_keys(raw)

    customer_name = _require_text(fields, "customer_name", "Customer name")
    email = validate_email(fields.get("email"))
    contact_number = validate_contact_number(fields.get("contact_number"))

    raw_date = fields.get("date")
    if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
        raise ValidationError("date", "Date is required")
    try:
        booking_date = to_datetime(raw_date, today=clock.now().date())
    except ValueError:
        raise ValidationError("date", f"Could not parse date '{raw_date}'") from None

    base_pay, commission, markup = (validate_money(fields, name) for name in MONEY_FIELDS)

    category = _parse_enum(BookingCategory, fields.get("category"), "category", "category")
    raw_status = fields.get("status")
    status = BookingStatus.PENDING
    if _text(raw_status):
        status = _parse_enum(BookingStatus, raw_status, "status", "status")

    platform: Optional[str] = _text(fields.get("platform")) or None
    if category.requires_platform and platform is None:
        raise ValidationError("platform", f"Platform is required for {category.value} bookings")

    return Booking(
        id=id_generator.next_id(BOOKING_PREFIX),
        customer_name=customer_name,
        email=email,
        contact_number=contact_number,
        date=booking_date,
        category=category,
        created_at=clock.now(),
        base_pay=base_pay,
        commission_amount=commission,
        markup_amount=markup,
        total_revenue=round_money(commission + markup),
        platform=platform,
        status=status,
    )
