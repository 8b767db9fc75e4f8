"""
In-memory inventory state for one session.

Owns the Item Store and Movement Log loaded at startup. The processor
mutates it through the methods below; the aggregator only reads it.
"""

from __future__ import annotations

import asyncio

from src.config import get_logger
from src.core.entities.inventory import InventoryItem, StockMovement
from src.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class InventoryState:
    """Item Store plus Movement Log, both ordered newest first."""

    def __init__(
        self,
        items: list[InventoryItem] | None = None,
        movements: list[StockMovement] | None = None,
    ) -> None:
        self._items: list[InventoryItem] = list(items or [])
        self._movements: list[StockMovement] = list(movements or [])
        self._unsynced: set[str] = set()

    @classmethod
    async def load(cls, store: IInventoryStore) -> InventoryState:
        """Fetch both collections from the backend in parallel."""
        items, movements = await asyncio.gather(
            store.fetch_items(),
            store.fetch_movements(),
        )
        logger.info(
            "inventory_state_loaded",
            backend=store.name,
            items=len(items),
            movements=len(movements),
        )
        return cls(items=items, movements=movements)

    # --- Item Store ---

    @property
    def items(self) -> list[InventoryItem]:
        return list(self._items)

    def get_item(self, item_id: str) -> InventoryItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def find_batch(self, name: str, batch_number: str) -> InventoryItem | None:
        """Item row with the same product name and batch, if any."""
        for item in self._items:
            if item.name == name and item.batch_number == batch_number:
                return item
        return None

    def add_item(self, item: InventoryItem, position: int = 0) -> None:
        self._items.insert(position, item)

    def position_of(self, item_id: str) -> int | None:
        for index, current in enumerate(self._items):
            if current.id == item_id:
                return index
        return None

    def replace_item(self, item: InventoryItem) -> InventoryItem | None:
        """Swap in ``item`` by id and return the record it replaced."""
        for index, current in enumerate(self._items):
            if current.id == item.id:
                self._items[index] = item
                return current
        return None

    def remove_item(self, item_id: str) -> InventoryItem | None:
        for index, current in enumerate(self._items):
            if current.id == item_id:
                return self._items.pop(index)
        return None

    # --- Movement Log ---

    @property
    def movements(self) -> list[StockMovement]:
        return list(self._movements)

    def append_movement(self, movement: StockMovement) -> None:
        self._movements.insert(0, movement)

    def mark_unsynced(self, movement_id: str) -> None:
        self._unsynced.add(movement_id)

    def mark_synced(self, movement_id: str) -> None:
        self._unsynced.discard(movement_id)

    def is_unsynced(self, movement_id: str) -> bool:
        return movement_id in self._unsynced

    @property
    def unsynced_movements(self) -> list[StockMovement]:
        """Pending movements, oldest first so replays keep log order."""
        return [m for m in reversed(self._movements) if m.id in self._unsynced]
