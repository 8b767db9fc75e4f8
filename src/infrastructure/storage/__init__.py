"""Storage infrastructure implementations."""

from src.infrastructure.storage.factory import create_inventory_store
from src.infrastructure.storage.remote import RestInventoryStore
from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteInventoryStore

__all__ = [
    # Backend selection
    "create_inventory_store",
    # Stores
    "RestInventoryStore",
    "SQLiteInventoryStore",
    "ConnectionPool",
]
