"""In-memory database implementation."""

from typing import Sequence

from agencybooks.database.base import Database
from agencybooks.domain.entities import Booking, Expense, LedgerEntry, WalletAccount
from agencybooks.domain.errors import PersistenceError


class InMemoryDatabase(Database):
    """Database that keeps snapshots in process memory.

    Setting ``fail_saves`` makes every write raise PersistenceError, which is
    how tests exercise the best-effort save path.
    """

    def __init__(self) -> None:
        self.bookings: list[Booking] = []
        self.expenses: list[Expense] = []
        self.wallets: list[WalletAccount] = []
        self.ledger_entries: list[LedgerEntry] = []
        self.fail_saves = False
        self.save_count = 0

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def _check_writable(self) -> None:
        if self.fail_saves:
            raise PersistenceError("In-memory database is configured to fail saves")
        self.save_count += 1

    def load_bookings(self) -> list[Booking]:
        return list(self.bookings)

    def replace_bookings(self, bookings: Sequence[Booking]) -> None:
        self._check_writable()
        self.bookings = list(bookings)

    def load_expenses(self) -> list[Expense]:
        return list(self.expenses)

    def replace_expenses(self, expenses: Sequence[Expense]) -> None:
        self._check_writable()
        self.expenses = list(expenses)

    def load_wallets(self) -> list[WalletAccount]:
        return list(self.wallets)

    def replace_wallets(self, wallets: Sequence[WalletAccount]) -> None:
        self._check_writable()
        self.wallets = list(wallets)

    def load_ledger_entries(self) -> list[LedgerEntry]:
        return list(self.ledger_entries)

    def record_movement(
        self, entries: Sequence[LedgerEntry], wallets: Sequence[WalletAccount]
    ) -> None:
        self._check_writable()
        self.ledger_entries.extend(entries)
        self.wallets = list(wallets)
