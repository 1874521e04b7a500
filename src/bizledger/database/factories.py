"""Store factory functions for creating entity store instances."""

import os
from pathlib import Path
from typing import Optional

from bizledger.database.sqlalchemy_db import SQLAlchemyStore

DB_PATH_ENV = "BIZLEDGER_DB_PATH"


def default_database_path() -> Path:
    """Location of the ledger database when none is configured."""
    return Path.home() / ".bizledger" / "bizledger.db"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed entity store.

    Args:
        database_path: Path to the SQLite file. Falls back to the
            BIZLEDGER_DB_PATH environment variable, then to
            ~/.bizledger/bizledger.db

    Returns:
        SQLAlchemyStore instance configured for SQLite
    """
    path = Path(database_path or os.environ.get(DB_PATH_ENV) or default_database_path())
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyStore(f"sqlite:///{path}")
