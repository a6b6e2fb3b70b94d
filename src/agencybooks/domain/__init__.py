"""Domain layer for agencybooks application."""

from agencybooks.domain.booking import BookingService
from agencybooks.domain.expense import ExpenseService
from agencybooks.domain.reporting import ReportService
from agencybooks.domain.wallet import WalletLedger

__all__ = [
    "BookingService",
    "ExpenseService",
    "ReportService",
    "WalletLedger",
]
