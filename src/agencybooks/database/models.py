"""SQLAlchemy models for agencybooks database."""

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Booking(Base):
    """Booking model."""

    __tablename__ = "bookings"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    customer_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    category = Column(String, nullable=False)
    platform = Column(String, nullable=True)
    status = Column(String, nullable=False)
    base_pay = Column(Numeric(12, 2), nullable=False)
    commission_amount = Column(Numeric(12, 2), nullable=False)
    markup_amount = Column(Numeric(12, 2), nullable=False)
    total_revenue = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False)


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)


class Wallet(Base):
    """Wallet balance model."""

    __tablename__ = "wallets"

    key = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    balance = Column(Numeric(12, 2), nullable=False)
    initial_balance = Column(Numeric(12, 2), nullable=False)


class LedgerEntry(Base):
    """Wallet ledger entry model; rows are only ever inserted."""

    __tablename__ = "ledger_entries"

    sequence = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    wallet_key = Column(String, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    operation = Column(String, nullable=False)
    actor = Column(String, nullable=False)
    timestamp = Column(DateTime, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
