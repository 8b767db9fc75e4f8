"""Integration test for the full item → movement → report flow over SQLite."""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest

from src.application.dto.requests import (
    BagEntryRequest,
    CreateItemRequest,
    RecordMovementRequest,
)
from src.application.services import InventoryServices, build_services
from src.application.use_cases import (
    BuildReportsUseCase,
    ItemCatalogUseCase,
    RecordMovementUseCase,
)
from src.config.settings import Settings
from src.core.entities.inventory import MovementType
from src.core.services import InventoryState
from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteInventoryStore
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def local_services(tmp_path: Path) -> AsyncGenerator[InventoryServices, None]:
    db_path = tmp_path / "flow.db"
    await initialize_database(db_path, create_backup_before=False)
    store = SQLiteInventoryStore(pool=ConnectionPool(db_path, pool_size=2))
    services = await build_services(
        store=store, settings=Settings(storage={"data_dir": tmp_path})
    )
    yield services
    await services.close()


class TestInventoryFlow:
    """Full flow: create → receive by batch and bags → sell → reload → report."""

    async def test_batch_split_survives_reload(self, local_services: InventoryServices):
        catalog = ItemCatalogUseCase(local_services)
        movements = RecordMovementUseCase(local_services)

        # Step 1: catalog row on batch X
        item = await catalog.create_item(
            CreateItemRequest(
                name="Chicle", category="Dulcería", quantity=10, price=2.0, batch_number="X"
            )
        )

        # Step 2: 4 bags of 50 on a new batch Y at $100 per bag
        entry = await movements.execute(
            RecordMovementRequest(
                item_id=item.id,
                type=MovementType.ENTRY,
                batch_number="Y",
                entry_date=date(2024, 2, 1),
                bags=BagEntryRequest(containers=4, units_per_container=50, cost_per_container=100),
            )
        )
        assert entry.ok and entry.clone_created
        clone_id = entry.item.id

        # Step 3: sell 30 from batch Y
        sale = await movements.execute(
            RecordMovementRequest(
                item_id=clone_id, type=MovementType.EXIT, quantity=30, sale_price=3.0
            )
        )
        assert sale.ok
        assert sale.item.quantity == 170

        # Step 4: a fresh session sees the same state
        reloaded = await InventoryState.load(local_services.store)
        quantities = {i.id: i.quantity for i in reloaded.items}
        assert quantities == {item.id: 10, clone_id: 170}
        assert len(reloaded.movements) == 2
        assert reloaded.movements[0].type == MovementType.EXIT

        # Step 5: reports
        report = BuildReportsUseCase(local_services).monthly()
        assert report.total_invested == 400.0
        assert report.total_earnings == 90.0
        assert report.total_units_sold == 30

    async def test_deleted_item_keeps_history(self, local_services: InventoryServices):
        catalog = ItemCatalogUseCase(local_services)
        movements = RecordMovementUseCase(local_services)

        item = await catalog.create_item(
            CreateItemRequest(name="Escoba", category="Jarcería", quantity=5, price=40.0)
        )
        await movements.execute(
            RecordMovementRequest(item_id=item.id, type=MovementType.EXIT, quantity=2)
        )
        await catalog.delete_item(item.id)

        reloaded = await InventoryState.load(local_services.store)
        assert reloaded.items == []
        assert len(reloaded.movements) == 1

        reports = BuildReportsUseCase(local_services)
        assert reports.monthly().products[0].category == "Eliminado"
        assert reports.dashboard().category_distribution[0].name == "Otros"
