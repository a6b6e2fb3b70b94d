"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay
unaware of column types and ordering columns.
"""

from decimal import Decimal

from agencybooks.domain import entities as domain
from agencybooks.database.models import (
    Booking as ORMBooking,
    Expense as ORMExpense,
    LedgerEntry as ORMLedgerEntry,
    Wallet as ORMWallet,
)
from agencybooks.utils.amount_parser import round_money


def _money(value) -> Decimal:
    return round_money(Decimal(value))


def booking_to_domain(orm_booking: ORMBooking) -> domain.Booking:
    """Convert SQLAlchemy Booking model to domain Booking entity."""
    return domain.Booking(
        id=orm_booking.id,
        customer_name=orm_booking.customer_name,
        email=orm_booking.email,
        contact_number=orm_booking.contact_number,
        date=orm_booking.date,
        category=domain.BookingCategory(orm_booking.category),
        created_at=orm_booking.created_at,
        base_pay=_money(orm_booking.base_pay),
        commission_amount=_money(orm_booking.commission_amount),
        markup_amount=_money(orm_booking.markup_amount),
        total_revenue=_money(orm_booking.total_revenue),
        platform=orm_booking.platform,
        status=domain.BookingStatus(orm_booking.status),
    )


def booking_to_orm(booking: domain.Booking, position: int) -> ORMBooking:
    """Convert domain Booking entity to a new SQLAlchemy Booking row."""
    return ORMBooking(
        id=booking.id,
        position=position,
        customer_name=booking.customer_name,
        email=booking.email,
        contact_number=booking.contact_number,
        date=booking.date,
        category=booking.category.value,
        platform=booking.platform,
        status=booking.status.value,
        base_pay=booking.base_pay,
        commission_amount=booking.commission_amount,
        markup_amount=booking.markup_amount,
        total_revenue=booking.total_revenue,
        created_at=booking.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        description=orm_expense.description,
        amount=_money(orm_expense.amount),
        category=orm_expense.category,
        date=orm_expense.date,
    )


def expense_to_orm(expense: domain.Expense, position: int) -> ORMExpense:
    """Convert domain Expense entity to a new SQLAlchemy Expense row."""
    return ORMExpense(
        id=expense.id,
        position=position,
        description=expense.description,
        amount=expense.amount,
        category=expense.category,
        date=expense.date,
    )


def wallet_to_domain(orm_wallet: ORMWallet) -> domain.WalletAccount:
    """Convert SQLAlchemy Wallet model to domain WalletAccount entity."""
    return domain.WalletAccount(
        key=orm_wallet.key,
        name=orm_wallet.name,
        balance=_money(orm_wallet.balance),
        initial_balance=_money(orm_wallet.initial_balance),
    )


def wallet_to_orm(wallet: domain.WalletAccount, position: int) -> ORMWallet:
    """Convert domain WalletAccount entity to a new SQLAlchemy Wallet row."""
    return ORMWallet(
        key=wallet.key,
        position=position,
        name=wallet.name,
        balance=wallet.balance,
        initial_balance=wallet.initial_balance,
    )


def ledger_entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        wallet_key=orm_entry.wallet_key,
        amount=_money(orm_entry.amount),
        operation=domain.LedgerOperation(orm_entry.operation),
        actor=orm_entry.actor,
        timestamp=orm_entry.timestamp,
    )


def ledger_entry_to_orm(entry: domain.LedgerEntry) -> ORMLedgerEntry:
    """Convert domain LedgerEntry entity to a new SQLAlchemy LedgerEntry row."""
    return ORMLedgerEntry(
        id=entry.id,
        wallet_key=entry.wallet_key,
        amount=entry.amount,
        operation=entry.operation.value,
        actor=entry.actor,
        timestamp=entry.timestamp,
    )
