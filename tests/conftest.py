"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.application.services import InventoryServices
from src.config.settings import Settings
from src.core.entities.inventory import InventoryItem, MovementType, StockMovement
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services import InventoryState, MovementProcessor


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing the local backend at a temporary directory."""
    return Settings(storage={"data_dir": tmp_path / "data"})


@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Factory for inventory items with sensible defaults."""

    def _make(**overrides) -> InventoryItem:
        data = {
            "name": "Paleta Payaso",
            "category": "Dulcería",
            "quantity": 10,
            "price": 12.5,
        }
        data.update(overrides)
        return InventoryItem(**data)

    return _make


@pytest.fixture
def make_movement() -> Callable[..., StockMovement]:
    """Factory for stock movements with sensible defaults."""

    def _make(item: InventoryItem, type: MovementType = MovementType.EXIT, **overrides):
        data = {
            "item_id": item.id,
            "item_name": item.name,
            "type": type,
            "quantity": 1,
            "timestamp": datetime(2024, 3, 15, 10, 30),
        }
        data.update(overrides)
        return StockMovement(**data)

    return _make


@pytest.fixture
def mock_store() -> AsyncMock:
    """Store double whose writes all succeed."""
    store = AsyncMock(spec=IInventoryStore)
    store.name = "mock"
    store.fetch_items.return_value = []
    store.fetch_movements.return_value = []
    return store


@pytest.fixture
def services(mock_store: AsyncMock, test_settings: Settings) -> InventoryServices:
    """Services container over an empty state and the mock store."""
    state = InventoryState()
    return InventoryServices(
        store=mock_store,
        state=state,
        processor=MovementProcessor(state=state, store=mock_store),
        settings=test_settings,
    )


@pytest_asyncio.fixture
async def async_client(services: InventoryServices) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the services container on ``app.state``."""
    from src.api.main import app

    app.state.services = services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.services = None
