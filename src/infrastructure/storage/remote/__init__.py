"""Remote REST storage implementation."""

from src.infrastructure.storage.remote.rest_store import RestInventoryStore

__all__ = ["RestInventoryStore"]
