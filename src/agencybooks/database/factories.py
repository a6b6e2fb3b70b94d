"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from agencybooks.database.sqlalchemy_db import SQLAlchemyDatabase


def default_database_path() -> Path:
    """Return ~/.agencybooks/agencybooks.db, creating the directory."""
    db_dir = Path.home() / ".agencybooks"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "agencybooks.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            AGENCYBOOKS_DB_PATH environment variable, then defaults to
            ~/.agencybooks/agencybooks.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("AGENCYBOOKS_DB_PATH")

    if database_path is None:
        database_path = str(default_database_path())

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
