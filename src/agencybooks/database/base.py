"""Abstract database interface.

Stores load their whole collection once at startup and write a full
snapshot after every mutation. The ledger log is append-only: new entries
are written in the same commit as the wallet balances they move.
"""

from abc import ABC, abstractmethod
from typing import Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from agencybooks.domain.entities import Booking, Expense, LedgerEntry, WalletAccount


class Database(ABC):
    """Abstract persistence collaborator for agencybooks."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Booking operations
    @abstractmethod
    def load_bookings(self) -> list[Booking]:
        """Load every stored booking."""
        pass

    @abstractmethod
    def replace_bookings(self, bookings: Sequence[Booking]) -> None:
        """Replace the stored bookings with ``bookings``."""
        pass

    # Expense operations
    @abstractmethod
    def load_expenses(self) -> list[Expense]:
        """Load every stored expense."""
        pass

    @abstractmethod
    def replace_expenses(self, expenses: Sequence[Expense]) -> None:
        """Replace the stored expenses with ``expenses``."""
        pass

    # Wallet operations
    @abstractmethod
    def load_wallets(self) -> list[WalletAccount]:
        """Load every stored wallet."""
        pass

    @abstractmethod
    def replace_wallets(self, wallets: Sequence[WalletAccount]) -> None:
        """Replace the stored wallet balances with ``wallets``."""
        pass

    @abstractmethod
    def load_ledger_entries(self) -> list[LedgerEntry]:
        """Load the ledger log in the order entries were appended."""
        pass

    @abstractmethod
    def record_movement(
        self, entries: Sequence[LedgerEntry], wallets: Sequence[WalletAccount]
    ) -> None:
        """Append ``entries`` to the ledger log and replace the stored wallets.

        Both writes succeed together or neither is applied.
        """
        pass
