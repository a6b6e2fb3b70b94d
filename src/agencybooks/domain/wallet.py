"""Wallet ledger domain service.

Each wallet balance moves only through ``credit`` and ``debit``, and every
movement appends exactly one LedgerEntry. The balance check, the balance
update and the log append for a movement happen under one lock, so no other
movement can interleave and a rejected debit leaves nothing behind.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Mapping, Optional

from agencybooks.domain.entities import LedgerEntry, LedgerOperation, WalletAccount
from agencybooks.domain.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    ValidationError,
)
from agencybooks.domain.store import SnapshotStore
from agencybooks.utils.amount_parser import AmountInput, to_money
from agencybooks.utils.clock import Clock, SystemClock
from agencybooks.utils.ids import LEDGER_ENTRY_PREFIX, IdGenerator, UuidIdGenerator
from agencybooks.utils.logging import get_logger

if TYPE_CHECKING:
    from agencybooks.database.base import Database

LOGGER = get_logger(__name__)

ZERO = Decimal("0.00")

DEFAULT_WALLETS: dict[str, Decimal] = {
    "alhind": Decimal("1000.00"),
    "akbar": Decimal("500.00"),
    "office": Decimal("2000.00"),
}

WALLET_NAMES = {
    "alhind": "AlHind",
    "akbar": "Akbar",
    "office": "Office Fund",
}


def wallet_display_name(key: str) -> str:
    """Human-readable wallet name."""
    return WALLET_NAMES.get(key, key.replace("_", " ").title())


def _positive_amount(amount: AmountInput) -> Decimal:
    try:
        value = to_money(amount)
    except ValueError:
        raise InvalidAmountError(amount) from None
    if value <= 0:
        raise InvalidAmountError(amount)
    return value


def _wallet_key(key: str) -> str:
    wallet_key = (key or "").strip()
    if not wallet_key:
        raise ValidationError("wallet_key", "Wallet key is required")
    return wallet_key


class WalletLedger(SnapshotStore):
    """Service owning wallet balances and the ledger log."""

    def __init__(
        self,
        db: "Database",
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        initial_balances: Optional[Mapping[str, AmountInput]] = None,
    ):
        """Initialize the ledger from stored wallets and entries.

        Args:
            db: Database instance
            clock: Time source for entry timestamps
            id_generator: Source of ledger entry ids
            initial_balances: Starting balance per wallet key; wallets not
                already stored are created with these amounts. Defaults to
                DEFAULT_WALLETS.
        """
        super().__init__()
        self.db = db
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidIdGenerator()

        seeds = DEFAULT_WALLETS if initial_balances is None else initial_balances
        self._wallets: dict[str, WalletAccount] = {w.key: w for w in db.load_wallets()}
        self._entries: list[LedgerEntry] = list(db.load_ledger_entries())
        # Entries whose save failed; written with the next movement
        self._unsaved: list[LedgerEntry] = []

        seeded = False
        for key, amount in seeds.items():
            if key in self._wallets:
                continue
            balance = to_money(amount)
            if balance < 0:
                raise ValueError(f"Starting balance for wallet '{key}' cannot be negative")
            self._wallets[key] = WalletAccount(
                key=key,
                name=wallet_display_name(key),
                balance=balance,
                initial_balance=balance,
            )
            seeded = True
        if seeded:
            self._persist_wallets()
        LOGGER.debug(
            "Loaded %d wallets and %d ledger entries", len(self._wallets), len(self._entries)
        )

    def _persist_wallets(self) -> None:
        snapshot = list(self._wallets.values())
        self._save("wallets", lambda: self.db.replace_wallets(snapshot))

    def _apply(
        self, wallet_key: str, amount: Decimal, operation: LedgerOperation, actor: str
    ) -> LedgerEntry:
        """Build the new wallet state and entry, then commit both together.

        Caller must hold ``_lock`` and have validated the movement.
        """
        current = self._wallets.get(wallet_key)
        if current is None:
            current = WalletAccount(
                key=wallet_key,
                name=wallet_display_name(wallet_key),
                balance=ZERO,
                initial_balance=ZERO,
            )
        delta = amount if operation == LedgerOperation.CREDIT else -amount
        updated = WalletAccount(
            key=current.key,
            name=current.name,
            balance=current.balance + delta,
            initial_balance=current.initial_balance,
        )
        entry = LedgerEntry(
            id=self.id_generator.next_id(LEDGER_ENTRY_PREFIX),
            wallet_key=wallet_key,
            amount=amount,
            operation=operation,
            actor=actor,
            timestamp=self.clock.now(),
        )

        self._wallets[wallet_key] = updated
        self._entries.append(entry)
        self._unsaved.append(entry)

        pending = list(self._unsaved)
        wallets = list(self._wallets.values())
        if self._save("wallet movement", lambda: self.db.record_movement(pending, wallets)):
            self._unsaved.clear()
        return entry

    def credit(self, wallet_key: str, amount: AmountInput, actor: str = "System") -> LedgerEntry:
        """Add funds to a wallet, creating it with a zero balance if unknown.

        Returns:
            The appended LedgerEntry

        Raises:
            InvalidAmountError: If amount is not greater than zero
        """
        key = _wallet_key(wallet_key)
        value = _positive_amount(amount)
        with self._lock:
            entry = self._apply(key, value, LedgerOperation.CREDIT, actor)
            balance = self._wallets[key].balance
        LOGGER.info("Credited %s to %s by %s (balance %s)", value, key, actor, balance)
        return entry

    def debit(self, wallet_key: str, amount: AmountInput, actor: str = "System") -> LedgerEntry:
        """Withdraw funds from a wallet.

        Returns:
            The appended LedgerEntry

        Raises:
            InvalidAmountError: If amount is not greater than zero
            InsufficientBalanceError: If the balance is below amount; the
                balance and the log are left untouched
        """
        key = _wallet_key(wallet_key)
        value = _positive_amount(amount)
        with self._lock:
            available = self._balance_of(key)
            if available < value:
                LOGGER.warning(
                    "Rejected debit of %s from %s by %s: only %s available",
                    value,
                    key,
                    actor,
                    available,
                )
                raise InsufficientBalanceError(key, available, value)
            entry = self._apply(key, value, LedgerOperation.DEBIT, actor)
            balance = self._wallets[key].balance
        LOGGER.info("Debited %s from %s by %s (balance %s)", value, key, actor, balance)
        return entry

    def _balance_of(self, wallet_key: str) -> Decimal:
        wallet = self._wallets.get(wallet_key)
        return wallet.balance if wallet is not None else ZERO

    def balance_of(self, wallet_key: str) -> Decimal:
        """Current balance; unknown wallets read as zero."""
        with self._lock:
            return self._balance_of(wallet_key)

    def get_wallet(self, wallet_key: str) -> Optional[WalletAccount]:
        """Get wallet by key."""
        with self._lock:
            return self._wallets.get(wallet_key)

    def list_wallets(self) -> list[WalletAccount]:
        """All known wallets in the order they were first seen."""
        with self._lock:
            return list(self._wallets.values())

    def history(
        self, wallet_key: Optional[str] = None, limit: Optional[int] = None
    ) -> list[LedgerEntry]:
        """Ledger entries, newest first.

        Args:
            wallet_key: Optional wallet filter
            limit: Optional maximum number of entries

        Returns:
            List of ledger entries
        """
        with self._lock:
            entries = list(self._entries)
        if wallet_key is not None:
            entries = [e for e in entries if e.wallet_key == wallet_key]
        entries.reverse()
        if limit is not None:
            entries = entries[: max(limit, 0)]
        return entries
