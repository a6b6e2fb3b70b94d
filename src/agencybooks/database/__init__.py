"""Database layer for agencybooks application."""

from agencybooks.database.base import Database
from agencybooks.database.factories import create_sqlite_database
from agencybooks.database.memory import InMemoryDatabase

__all__ = ["Database", "InMemoryDatabase", "create_sqlite_database"]
