"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.inventory_store import IInventoryStore

__all__ = [
    "IInventoryStore",
]
