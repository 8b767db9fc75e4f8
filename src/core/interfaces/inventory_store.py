"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import InventoryItem, StockMovement


class IInventoryStore(ABC):
    """
    Persistence contract shared by the remote and local backends.

    Movements have no update or delete: the log is append-only.
    """

    #: Short backend label used in logs and health output.
    name: str = "unknown"

    @abstractmethod
    async def fetch_items(self) -> list[InventoryItem]:
        """Fetch every item in the catalog."""
        pass

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> None:
        """Insert a new item."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem) -> None:
        """Replace the full record keyed by ``item.id``."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> None:
        """Delete an item. Movements referencing it are kept."""
        pass

    @abstractmethod
    async def fetch_movements(self) -> list[StockMovement]:
        """Fetch the movement log, newest first."""
        pass

    @abstractmethod
    async def create_movement(self, movement: StockMovement) -> None:
        """
        Append a movement.

        Inserting an id that already exists must be a no-op so that
        unsynced movements can be replayed safely.
        """
        pass

    async def close(self) -> None:
        """Release backend resources. Default: nothing to release."""
        return None
