"""Shared pytest fixtures for agencybooks tests."""

import os
import tempfile
from datetime import datetime

import pytest

from agencybooks.database.factories import create_sqlite_database
from agencybooks.database.memory import InMemoryDatabase
from agencybooks.domain.booking import BookingService
from agencybooks.domain.expense import ExpenseService
from agencybooks.domain.reporting import ReportService
from agencybooks.domain.wallet import WalletLedger
from agencybooks.utils.clock import FixedClock
from agencybooks.utils.ids import SequentialIdGenerator

NOW = datetime(2026, 10, 18, 12, 0, 0)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory database."""
    return InMemoryDatabase()


@pytest.fixture
def clock():
    """Clock pinned to 2026-10-18 12:00."""
    return FixedClock(NOW)


@pytest.fixture
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture
def booking_service(memory_db, clock, id_generator):
    """Create a BookingService over an in-memory database."""
    return BookingService(memory_db, clock=clock, id_generator=id_generator)


@pytest.fixture
def expense_service(memory_db, clock, id_generator):
    """Create an ExpenseService over an in-memory database."""
    return ExpenseService(memory_db, clock=clock, id_generator=id_generator)


@pytest.fixture
def wallet_ledger(memory_db, clock, id_generator):
    """Create a WalletLedger seeded with the default wallets."""
    return WalletLedger(memory_db, clock=clock, id_generator=id_generator)


@pytest.fixture
def report_service(booking_service, expense_service, clock):
    """Create a ReportService over the booking and expense fixtures."""
    return ReportService(booking_service, expense_service, clock=clock)


@pytest.fixture
def booking_fields():
    """Return a factory for valid booking submissions."""

    def make(**overrides):
        fields = {
            "customer_name": "Asha Menon",
            "email": "asha@example.com",
            "contact_number": "9876543210",
            "date": NOW,
            "category": "flight",
            "platform": "direct",
            "base_pay": "1000",
            "commission_amount": "200",
            "markup_amount": "50",
        }
        fields.update(overrides)
        return fields

    return make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
