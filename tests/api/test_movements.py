"""API tests for movement endpoints."""

import pytest
from httpx import AsyncClient

from src.core.exceptions import StorageUnavailableError


@pytest.fixture
def item(services, make_item):
    item = make_item(name="Chicle", quantity=10, price=2.0, batch_number="X")
    services.state.add_item(item)
    return item


class TestMovementsAPI:
    async def test_record_exit(self, async_client: AsyncClient, item):
        response = await async_client.post(
            "/api/movements",
            json={"item_id": item.id, "type": "exit", "quantity": 4, "sale_price": 3.0},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "applied"
        assert data["item"]["quantity"] == 6
        assert data["movement"]["sale_price"] == 3.0

    async def test_record_bag_entry_with_batch(self, async_client: AsyncClient, services, item):
        response = await async_client.post(
            "/api/movements",
            json={
                "item_id": item.id,
                "type": "entry",
                "batch_number": "Y",
                "entry_date": "2024-05-10",
                "bags": {"containers": 4, "units_per_container": 50, "cost_per_container": 100},
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["clone_created"] is True
        assert data["item"]["quantity"] == 200
        assert data["item"]["batch_number"] == "Y"
        assert data["movement"]["purchase_price"] == 2.0
        assert data["movement"]["timestamp"].startswith("2024-05-10T12:00")
        assert services.state.get_item(item.id).quantity == 10

    async def test_invalid_quantity(self, async_client: AsyncClient, item):
        response = await async_client.post(
            "/api/movements", json={"item_id": item.id, "type": "exit", "quantity": 0}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_QUANTITY"

    async def test_bags_on_exit(self, async_client: AsyncClient, item):
        response = await async_client.post(
            "/api/movements",
            json={
                "item_id": item.id,
                "type": "exit",
                "bags": {"containers": 1, "units_per_container": 5},
            },
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_BAG_CONFIGURATION"

    async def test_unknown_item(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/movements", json={"item_id": "missing", "type": "entry", "quantity": 1}
        )
        assert response.status_code == 404

    async def test_failed_write_returns_503(self, async_client: AsyncClient, item, mock_store):
        mock_store.update_item.side_effect = StorageUnavailableError("update_item", "down")
        response = await async_client.post(
            "/api/movements", json={"item_id": item.id, "type": "exit", "quantity": 1}
        )
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "failed"
        assert data["stage"] == "item_update"
        assert data["pending_sync"] is False

    async def test_history_and_sync(self, async_client: AsyncClient, item, mock_store):
        mock_store.create_movement.side_effect = StorageUnavailableError("create_movement", "x")
        failed = await async_client.post(
            "/api/movements", json={"item_id": item.id, "type": "exit", "quantity": 1}
        )
        assert failed.json()["pending_sync"] is True

        history = (await async_client.get("/api/movements", params={"type": "exit"})).json()
        assert history["total"] == 1
        assert history["movements"][0]["synced"] is False

        mock_store.create_movement.side_effect = None
        synced = (await async_client.post("/api/movements/sync")).json()
        assert synced["synced"] == [failed.json()["movement"]["id"]]

        history = (await async_client.get("/api/movements", params={"q": "chic"})).json()
        assert history["movements"][0]["synced"] is True

    async def test_history_rejects_unknown_type(self, async_client: AsyncClient):
        response = await async_client.get("/api/movements", params={"type": "transfer"})
        assert response.status_code == 422
