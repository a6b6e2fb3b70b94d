"""Identifier generators for bookings, expenses and ledger entries."""

import threading
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict

BOOKING_PREFIX = "BK"
EXPENSE_PREFIX = "EX"
LEDGER_ENTRY_PREFIX = "TX"


class IdGenerator(ABC):
    """Produces identifiers that never repeat within a process."""

    @abstractmethod
    def next_id(self, prefix: str) -> str:
        """Return a fresh identifier starting with ``prefix``."""


class UuidIdGenerator(IdGenerator):
    """Random identifiers such as ``BK-3f2a...``."""

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic per-prefix counters such as ``BK0001``."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def next_id(self, prefix: str) -> str:
        with self._lock:
            self._counters[prefix] += 1
            return f"{prefix}{self._counters[prefix]:04d}"
