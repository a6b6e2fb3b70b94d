"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """A booking submission field failed validation.

    Only the first violated rule is reported.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidStatusError(DomainError):
    """Target booking status is outside the status enumeration."""

    def __init__(self, status: object):
        super().__init__(f"Invalid status '{status}'")
        self.status = status


class InvalidAmountError(DomainError):
    """Wallet credit or debit amount is not strictly positive."""

    def __init__(self, amount: object):
        super().__init__(f"Amount must be greater than 0, got {amount}")
        self.amount = amount


class InsufficientBalanceError(DomainError):
    """Debit exceeds the wallet balance; nothing was applied."""

    def __init__(self, wallet_key: str, available: Decimal, requested: Decimal):
        super().__init__(insufficient_balance(wallet_key, available, requested))
        self.wallet_key = wallet_key
        self.available = available
        self.requested = requested


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class PersistenceError(DomainError):
    """The durable store failed to save a snapshot."""


def booking_not_found(booking_id: str) -> str:
    """Return message for missing booking."""
    return f"Booking {booking_id} not found"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def insufficient_balance(wallet_key: str, available: Decimal, requested: Decimal) -> str:
    """Return message for a rejected debit."""
    return (
        f"Insufficient balance in {wallet_key}. "
        f"Available: {available:,.2f}, Required: {requested:,.2f}"
    )
