"""Entity store layer for bizledger application."""

from bizledger.database.base import EntityStore
from bizledger.database.factories import create_sqlite_store

__all__ = ["EntityStore", "create_sqlite_store"]
