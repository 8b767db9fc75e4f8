"""Tests for the remote REST inventory store."""

import json

import httpx
import pytest

from src.config.settings import RemoteSettings
from src.core.entities.inventory import MovementType
from src.core.exceptions import StorageRejectedError, StorageUnavailableError
from src.infrastructure.storage.remote import RestInventoryStore
from src.infrastructure.storage.wire import item_to_record, movement_to_record


@pytest.fixture
def remote_settings() -> RemoteSettings:
    return RemoteSettings(
        url="https://db.example.com",
        api_key="secret",
        max_retries=3,
        retry_delay=0,
    )


class Recorder:
    """MockTransport handler that records requests and replays responses."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


def _store(settings: RemoteSettings, handler) -> RestInventoryStore:
    return RestInventoryStore(settings, transport=httpx.MockTransport(handler))


class TestReads:
    async def test_fetch_items(self, remote_settings, make_item):
        item = make_item()
        recorder = Recorder(httpx.Response(200, json=[item_to_record(item)]))
        store = _store(remote_settings, recorder)

        items = await store.fetch_items()

        assert [i.id for i in items] == [item.id]
        request = recorder.requests[0]
        assert request.url.path == "/rest/v1/items"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "secret"
        assert request.headers["authorization"] == "Bearer secret"
        await store.close()

    async def test_fetch_movements_ordered(self, remote_settings, make_item, make_movement):
        movement = make_movement(make_item())
        recorder = Recorder(httpx.Response(200, json=[movement_to_record(movement)]))
        store = _store(remote_settings, recorder)

        movements = await store.fetch_movements()

        assert movements[0].id == movement.id
        assert recorder.requests[0].url.path == "/rest/v1/movements"
        assert recorder.requests[0].url.params["order"] == "timestamp.desc"
        await store.close()


class TestWrites:
    async def test_create_item(self, remote_settings, make_item):
        item = make_item()
        recorder = Recorder(httpx.Response(201))
        store = _store(remote_settings, recorder)

        await store.create_item(item)

        request = recorder.requests[0]
        assert request.method == "POST"
        assert json.loads(request.content)["id"] == item.id
        await store.close()

    async def test_update_item_patches_by_id(self, remote_settings, make_item):
        item = make_item(quantity=3)
        recorder = Recorder(httpx.Response(204))
        store = _store(remote_settings, recorder)

        await store.update_item(item)

        request = recorder.requests[0]
        body = json.loads(request.content)
        assert request.method == "PATCH"
        assert request.url.params["id"] == f"eq.{item.id}"
        assert body["quantity"] == 3
        assert "id" not in body
        assert "created_at" not in body
        await store.close()

    async def test_delete_item(self, remote_settings):
        recorder = Recorder(httpx.Response(204))
        store = _store(remote_settings, recorder)

        await store.delete_item("abc")

        assert recorder.requests[0].method == "DELETE"
        assert recorder.requests[0].url.params["id"] == "eq.abc"
        await store.close()

    async def test_create_movement_ignores_duplicates(
        self, remote_settings, make_item, make_movement
    ):
        movement = make_movement(make_item(), MovementType.ENTRY, purchase_price=2.0)
        recorder = Recorder(httpx.Response(201))
        store = _store(remote_settings, recorder)

        await store.create_movement(movement)

        request = recorder.requests[0]
        assert "resolution=ignore-duplicates" in request.headers["prefer"]
        assert json.loads(request.content)["type"] == "entry"
        await store.close()


class TestRetries:
    async def test_transient_status_retried(self, remote_settings):
        recorder = Recorder(httpx.Response(503), httpx.Response(200, json=[]))
        store = _store(remote_settings, recorder)

        assert await store.fetch_items() == []
        assert len(recorder.requests) == 2
        await store.close()

    async def test_gives_up_after_max_retries(self, remote_settings):
        recorder = Recorder(httpx.Response(500))
        store = _store(remote_settings, recorder)

        with pytest.raises(StorageUnavailableError) as exc_info:
            await store.fetch_items()

        assert len(recorder.requests) == 3
        assert exc_info.value.details["attempts"] == 3
        await store.close()

    async def test_connection_error_retried(self, remote_settings):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        store = _store(remote_settings, handler)

        with pytest.raises(StorageUnavailableError):
            await store.fetch_items()
        assert len(calls) == 3
        await store.close()

    async def test_client_error_not_retried(self, remote_settings, make_item):
        recorder = Recorder(httpx.Response(409, text="duplicate key"))
        store = _store(remote_settings, recorder)

        with pytest.raises(StorageRejectedError) as exc_info:
            await store.create_item(make_item())

        assert len(recorder.requests) == 1
        assert exc_info.value.details["status_code"] == 409
        await store.close()
