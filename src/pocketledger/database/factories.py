"""Database factory functions for creating database instances."""

from typing import Optional

from pocketledger.config import get_settings
from pocketledger.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, the configured
            path is used (POCKETLEDGER_DB_PATH, then ~/.pocketledger/ledger.db)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = get_settings().database_path

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
