"""Tests for the SQLite inventory store."""

from datetime import datetime

import pytest

from src.core.entities.inventory import MovementType
from src.core.exceptions import StorageRejectedError, StorageUnavailableError
from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteInventoryStore


class TestItems:
    async def test_create_and_fetch(self, sqlite_store, make_item):
        item = make_item(image_ref="img/p.png", batch_number="L-1", description="de fresa")
        await sqlite_store.create_item(item)

        fetched = await sqlite_store.fetch_items()

        assert len(fetched) == 1
        assert fetched[0].id == item.id
        assert fetched[0].name == item.name
        assert fetched[0].image_ref == "img/p.png"
        assert fetched[0].batch_number == "L-1"
        assert fetched[0].description == "de fresa"

    async def test_fetch_newest_first(self, sqlite_store, make_item):
        old = make_item(name="Viejo", created_at=datetime(2023, 1, 1))
        new = make_item(name="Nuevo", created_at=datetime(2024, 1, 1))
        await sqlite_store.create_item(old)
        await sqlite_store.create_item(new)

        assert [i.name for i in await sqlite_store.fetch_items()] == ["Nuevo", "Viejo"]

    async def test_duplicate_id_rejected(self, sqlite_store, make_item):
        item = make_item()
        await sqlite_store.create_item(item)
        with pytest.raises(StorageRejectedError):
            await sqlite_store.create_item(item)

    async def test_update(self, sqlite_store, make_item):
        item = make_item(quantity=1)
        await sqlite_store.create_item(item)

        await sqlite_store.update_item(item.model_copy(update={"quantity": 42}))

        assert (await sqlite_store.fetch_items())[0].quantity == 42

    async def test_update_missing_rejected(self, sqlite_store, make_item):
        with pytest.raises(StorageRejectedError):
            await sqlite_store.update_item(make_item())

    async def test_delete_keeps_movements(self, sqlite_store, make_item, make_movement):
        item = make_item()
        await sqlite_store.create_item(item)
        await sqlite_store.create_movement(make_movement(item))

        await sqlite_store.delete_item(item.id)

        assert await sqlite_store.fetch_items() == []
        assert len(await sqlite_store.fetch_movements()) == 1


class TestMovements:
    async def test_create_and_fetch_newest_first(self, sqlite_store, make_item, make_movement):
        item = make_item()
        old = make_movement(item, timestamp=datetime(2024, 1, 1), sale_price=3.0)
        new = make_movement(
            item,
            MovementType.ENTRY,
            timestamp=datetime(2024, 2, 1),
            purchase_price=1.25,
            batch_number="B",
        )
        await sqlite_store.create_movement(old)
        await sqlite_store.create_movement(new)

        fetched = await sqlite_store.fetch_movements()

        assert [m.id for m in fetched] == [new.id, old.id]
        assert fetched[0].purchase_price == 1.25
        assert fetched[0].batch_number == "B"
        assert fetched[1].sale_price == 3.0
        assert fetched[1].timestamp == datetime(2024, 1, 1)

    async def test_replay_is_noop(self, sqlite_store, make_item, make_movement):
        movement = make_movement(make_item())
        await sqlite_store.create_movement(movement)
        await sqlite_store.create_movement(movement)

        assert len(await sqlite_store.fetch_movements()) == 1


class TestErrors:
    async def test_missing_schema_is_unavailable(self, temp_db_path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        store = SQLiteInventoryStore(pool=pool)

        with pytest.raises(StorageUnavailableError):
            await store.fetch_items()
        await store.close()
