"""Utility functions for agencybooks."""

from agencybooks.utils.amount_parser import parse_amount, round_money, to_money
from agencybooks.utils.clock import Clock, FixedClock, SystemClock
from agencybooks.utils.date_parser import parse_date, to_datetime
from agencybooks.utils.ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator

__all__ = [
    "parse_amount",
    "round_money",
    "to_money",
    "Clock",
    "FixedClock",
    "SystemClock",
    "parse_date",
    "to_datetime",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
]
