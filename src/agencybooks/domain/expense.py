"""Expense domain service."""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from agencybooks.domain.entities import Expense, RankedEntity
from agencybooks.domain.store import SnapshotStore
from agencybooks.utils.amount_parser import AmountInput, to_money
from agencybooks.utils.clock import Clock, SystemClock
from agencybooks.utils.date_parser import DateInput, to_datetime
from agencybooks.utils.ids import EXPENSE_PREFIX, IdGenerator, UuidIdGenerator
from agencybooks.utils.logging import get_logger

if TYPE_CHECKING:
    from agencybooks.database.base import Database

LOGGER = get_logger(__name__)

DEFAULT_CATEGORY = "Other"
EXPENSE_CATEGORIES = ("Fuel", "Salary", "Rent", "Marketing", "Maintenance", "Other")


class ExpenseService(SnapshotStore):
    """Service owning the expense collection."""

    def __init__(
        self,
        db: "Database",
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        """Initialize expense service and load stored expenses.

        Args:
            db: Database instance
            clock: Time source for expense dates
            id_generator: Source of expense ids
        """
        super().__init__()
        self.db = db
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidIdGenerator()
        self._expenses: list[Expense] = list(db.load_expenses())

    def _persist(self) -> None:
        snapshot = list(self._expenses)
        self._save("expenses", lambda: self.db.replace_expenses(snapshot))

    def add_expense(
        self,
        description: str,
        amount: AmountInput,
        category: Optional[str] = None,
        date: Optional[DateInput] = None,
    ) -> Optional[Expense]:
        """Record an expense.

        Blank descriptions, non-positive or unparseable amounts and
        unparseable dates are declined without raising.

        Args:
            description: What the money was spent on
            amount: Amount spent, greater than zero
            category: Optional category (defaults to "Other")
            date: Optional date (defaults to now)

        Returns:
            The created Expense, or None if the input was declined
        """
        text = (description or "").strip()
        try:
            value = to_money(amount)
        except ValueError:
            value = None
        if not text or value is None or value <= 0:
            LOGGER.warning("Declined expense %r with amount %r", description, amount)
            return None

        now = self.clock.now()
        if date is None:
            when = now
        else:
            try:
                when = to_datetime(date, today=now.date())
            except ValueError:
                LOGGER.warning("Declined expense %r with date %r", description, date)
                return None

        expense = Expense(
            id=self.id_generator.next_id(EXPENSE_PREFIX),
            description=text,
            amount=value,
            category=(category or "").strip() or DEFAULT_CATEGORY,
            date=when,
        )
        with self._lock:
            self._expenses.append(expense)
            self._persist()
        LOGGER.info("Added expense %s: %s (%s)", expense.id, expense.description, expense.amount)
        return expense

    def remove_expense(self, expense_id: str) -> bool:
        """Delete an expense.

        Returns:
            True if an expense was removed, False if the id was unknown
        """
        with self._lock:
            remaining = [e for e in self._expenses if e.id != expense_id]
            if len(remaining) == len(self._expenses):
                return False
            self._expenses = remaining
            self._persist()
        LOGGER.info("Removed expense %s", expense_id)
        return True

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        with self._lock:
            return next((e for e in self._expenses if e.id == expense_id), None)

    def snapshot(self) -> list[Expense]:
        """Return the expenses in insertion order."""
        with self._lock:
            return list(self._expenses)

    def list_expenses(self) -> list[Expense]:
        """Expenses, newest first."""
        return sorted(self.snapshot(), key=lambda e: e.date, reverse=True)

    def total(self) -> Decimal:
        """Sum of all expense amounts."""
        return sum((e.amount for e in self.snapshot()), Decimal("0.00"))

    def category_totals(self, include_defaults: bool = False) -> list[RankedEntity]:
        """Amount spent per category, largest first.

        Args:
            include_defaults: If True, list every default category even
                when nothing was spent in it

        Returns:
            List of RankedEntity sorted by amount descending
        """
        totals: dict[str, Decimal] = {}
        if include_defaults:
            for name in EXPENSE_CATEGORIES:
                totals[name] = Decimal("0.00")
        for expense in self.snapshot():
            name = expense.category or DEFAULT_CATEGORY
            totals[name] = totals.get(name, Decimal("0.00")) + expense.amount
        ranked = [RankedEntity(name=name, amount=amount) for name, amount in totals.items()]
        return sorted(ranked, key=lambda r: r.amount, reverse=True)
