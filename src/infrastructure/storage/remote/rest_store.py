"""
Remote inventory storage over a PostgREST-style REST database.

Features:
- Async httpx client with a per-request timeout
- Bounded retries with exponential backoff on transient failures
  (timeouts, connection errors, HTTP 429/5xx)
- Structured error classification: transient failures surface as
  StorageUnavailableError, rejected writes as StorageRejectedError
"""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger
from src.config.settings import RemoteSettings
from src.core.entities.inventory import InventoryItem, StockMovement
from src.core.exceptions import StorageRejectedError, StorageUnavailableError
from src.core.interfaces.inventory_store import IInventoryStore
from src.infrastructure.storage.wire import (
    item_from_record,
    item_to_record,
    movement_from_record,
    movement_to_record,
)

logger = get_logger(__name__)

_RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


class _TransientHTTPError(Exception):
    """Retryable HTTP status, raised only inside the retry loop."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body[:200]}")
        self.status_code = status_code


class RestInventoryStore(IInventoryStore):
    """Item and movement persistence in a remote REST database."""

    name = "remote"

    def __init__(
        self,
        settings: RemoteSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            base_url = self._settings.url.rstrip("/") + self._settings.schema_path
            self._client = httpx.AsyncClient(
                base_url=base_url,
                timeout=self._settings.timeout,
                transport=self._transport,
                headers={
                    "apikey": self._settings.api_key,
                    "Authorization": f"Bearer {self._settings.api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "remote_store_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request, retrying transient failures with backoff."""
        client = self._get_client()
        attempts = max(1, self._settings.max_retries)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(
                multiplier=self._settings.retry_delay,
                min=self._settings.retry_delay,
                max=self._settings.retry_delay * (self._settings.retry_multiplier**3),
            ),
            retry=retry_if_exception_type((httpx.TransportError, _TransientHTTPError)),
            before_sleep=self._log_retry,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await client.request(
                        method, path, params=params, json=json, headers=headers
                    )
                    if response.status_code in _RETRYABLE_STATUS_CODES:
                        raise _TransientHTTPError(response.status_code, response.text)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error("remote_store_unavailable", operation=operation, error=str(cause))
            raise StorageUnavailableError(operation, str(cause), attempts=attempts) from cause

        if response.is_error:
            logger.error(
                "remote_store_rejected",
                operation=operation,
                status_code=response.status_code,
            )
            raise StorageRejectedError(
                operation, response.text[:200], status_code=response.status_code
            )
        return response

    async def fetch_items(self) -> list[InventoryItem]:
        response = await self._request(
            "fetch_items",
            "GET",
            f"/{self._settings.items_table}",
            params={"select": "*"},
        )
        return [item_from_record(record) for record in response.json()]

    async def create_item(self, item: InventoryItem) -> None:
        await self._request(
            "create_item",
            "POST",
            f"/{self._settings.items_table}",
            json=item_to_record(item),
            headers={"Prefer": "return=minimal"},
        )
        logger.info("item_created", item_id=item.id, backend=self.name)

    async def update_item(self, item: InventoryItem) -> None:
        record = item_to_record(item)
        record.pop("id")
        record.pop("created_at")
        await self._request(
            "update_item",
            "PATCH",
            f"/{self._settings.items_table}",
            params={"id": f"eq.{item.id}"},
            json=record,
            headers={"Prefer": "return=minimal"},
        )
        logger.info("item_updated", item_id=item.id, backend=self.name)

    async def delete_item(self, item_id: str) -> None:
        await self._request(
            "delete_item",
            "DELETE",
            f"/{self._settings.items_table}",
            params={"id": f"eq.{item_id}"},
        )
        logger.info("item_deleted", item_id=item_id, backend=self.name)

    async def fetch_movements(self) -> list[StockMovement]:
        response = await self._request(
            "fetch_movements",
            "GET",
            f"/{self._settings.movements_table}",
            params={"select": "*", "order": "timestamp.desc"},
        )
        return [movement_from_record(record) for record in response.json()]

    async def create_movement(self, movement: StockMovement) -> None:
        await self._request(
            "create_movement",
            "POST",
            f"/{self._settings.movements_table}",
            json=movement_to_record(movement),
            headers={"Prefer": "return=minimal,resolution=ignore-duplicates"},
        )
        logger.info(
            "stock_movement_recorded",
            movement_id=movement.id,
            type=movement.type.value,
            backend=self.name,
        )
