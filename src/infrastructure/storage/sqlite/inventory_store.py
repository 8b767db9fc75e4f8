"""SQLite implementation of inventory storage (local fallback backend)."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from src.config import get_logger, get_settings
from src.core.entities.inventory import InventoryItem, StockMovement
from src.core.exceptions import StorageRejectedError, StorageUnavailableError
from src.core.interfaces.inventory_store import IInventoryStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.wire import (
    item_from_record,
    item_to_record,
    movement_from_record,
    movement_to_record,
)

logger = get_logger(__name__)

_ITEM_COLUMNS = (
    "id, name, category, quantity, price, description, "
    "image_url, created_at, updated_at, batch_number"
)
_MOVEMENT_COLUMNS = (
    "id, item_id, item_name, type, quantity, timestamp, "
    "batch_number, sale_price, purchase_price"
)


class SQLiteInventoryStore(IInventoryStore):
    """Item and movement persistence in a local SQLite file."""

    name = "sqlite"

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool or ConnectionPool.from_settings(get_settings().storage)

    async def close(self) -> None:
        await self._pool.close()

    @asynccontextmanager
    async def _write(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        """Transaction that maps sqlite errors onto persistence errors."""
        try:
            async with self._pool.transaction() as conn:
                yield conn
        except aiosqlite.IntegrityError as e:
            raise StorageRejectedError(operation, str(e)) from e
        except aiosqlite.Error as e:
            raise StorageUnavailableError(operation, str(e)) from e

    async def _read(self, operation: str, sql: str) -> list[aiosqlite.Row]:
        try:
            async with self._pool.acquire() as conn:
                cursor = await conn.execute(sql)
                return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            raise StorageUnavailableError(operation, str(e)) from e

    async def fetch_items(self) -> list[InventoryItem]:
        rows = await self._read(
            "fetch_items",
            f"SELECT {_ITEM_COLUMNS} FROM items ORDER BY created_at DESC",
        )
        return [item_from_record(dict(row)) for row in rows]

    async def create_item(self, item: InventoryItem) -> None:
        record = item_to_record(item)
        async with self._write("create_item") as conn:
            await conn.execute(
                f"""
                INSERT INTO items ({_ITEM_COLUMNS})
                VALUES (:id, :name, :category, :quantity, :price, :description,
                        :image_url, :created_at, :updated_at, :batch_number)
                """,
                record,
            )
        logger.info("item_created", item_id=item.id, name=item.name)

    async def update_item(self, item: InventoryItem) -> None:
        record = item_to_record(item)
        async with self._write("update_item") as conn:
            cursor = await conn.execute(
                """
                UPDATE items SET
                    name = :name,
                    category = :category,
                    quantity = :quantity,
                    price = :price,
                    description = :description,
                    image_url = :image_url,
                    updated_at = :updated_at,
                    batch_number = :batch_number
                WHERE id = :id
                """,
                record,
            )
            if cursor.rowcount == 0:
                raise StorageRejectedError("update_item", f"no item with id {item.id}")
        logger.info("item_updated", item_id=item.id, quantity=item.quantity)

    async def delete_item(self, item_id: str) -> None:
        async with self._write("delete_item") as conn:
            await conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
        logger.info("item_deleted", item_id=item_id)

    async def fetch_movements(self) -> list[StockMovement]:
        rows = await self._read(
            "fetch_movements",
            f"SELECT {_MOVEMENT_COLUMNS} FROM movements ORDER BY timestamp DESC",
        )
        return [movement_from_record(dict(row)) for row in rows]

    async def create_movement(self, movement: StockMovement) -> None:
        async with self._write("create_movement") as conn:
            await conn.execute(
                f"""
                INSERT OR IGNORE INTO movements ({_MOVEMENT_COLUMNS})
                VALUES (:id, :item_id, :item_name, :type, :quantity, :timestamp,
                        :batch_number, :sale_price, :purchase_price)
                """,
                movement_to_record(movement),
            )
        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            type=movement.type.value,
            qty=movement.quantity,
        )
