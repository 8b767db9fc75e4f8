"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore

__all__ = [
    "ConnectionPool",
    "SQLiteInventoryStore",
]
