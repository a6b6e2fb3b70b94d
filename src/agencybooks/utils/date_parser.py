"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser

DateInput = Union[str, date, datetime]


def parse_date(date_str: str, today: Optional[date] = None) -> datetime:
    """Parse a date string into a datetime.

    Supports absolute dates ("2024-01-15", "January 15, 2024 10:30") and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats
        today: Reference day for relative words (defaults to date.today())

    Returns:
        Datetime; dates without a time component resolve to midnight

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return datetime.combine(relative_dates[date_str], time.min)

    try:
        return date_parser.parse(date_str)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def to_datetime(value: DateInput, today: Optional[date] = None) -> datetime:
    """Normalize a date, datetime or string into a naive local datetime.

    ``today`` anchors relative words in strings, as in ``parse_date``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return to_datetime(parse_date(value, today=today))
    raise ValueError(f"Unsupported date value: {value!r}")


def end_of_day(value: Union[date, datetime]) -> datetime:
    """Return the last representable instant of a calendar day.

    A datetime is returned unchanged apart from timezone normalization; a
    plain date is widened to cover the whole day.
    """
    if isinstance(value, datetime):
        return to_datetime(value)
    return datetime.combine(value, time.max)
