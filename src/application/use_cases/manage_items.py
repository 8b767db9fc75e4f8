"""Item Catalog Use Case: create, edit and delete catalog rows."""

from datetime import datetime

from src.application.dto.requests import CreateItemRequest, UpdateItemRequest
from src.application.dto.responses import ItemListResponse, ItemResponse
from src.application.services import InventoryServices
from src.config import get_logger
from src.core.entities.inventory import InventoryItem, new_id
from src.core.exceptions import ItemNotFoundError, PersistenceError
from src.core.services import aggregator

logger = get_logger(__name__)


class ItemCatalogUseCase:
    """
    Catalog maintenance outside of stock movements.

    Each write is applied to the session state first and rolled back if
    the backend rejects it; the error is then re-raised to the caller.
    """

    def __init__(self, services: InventoryServices):
        self._services = services

    @property
    def _threshold(self) -> int:
        return self._services.settings.inventory.low_stock_threshold

    def list_items(
        self,
        query: str = "",
        category: str | None = None,
        low_stock_only: bool = False,
    ) -> list[InventoryItem]:
        return aggregator.search_items(
            self._services.state.items,
            query=query,
            category=category,
            low_stock_only=low_stock_only,
            low_stock_threshold=self._threshold,
        )

    def get_item(self, item_id: str) -> InventoryItem:
        item = self._services.state.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    async def create_item(self, request: CreateItemRequest) -> InventoryItem:
        now = datetime.now()
        item = InventoryItem(
            id=new_id(),
            name=request.name.strip(),
            category=request.category.strip(),
            quantity=request.quantity,
            price=request.price,
            description=request.description,
            image_ref=request.image_ref,
            batch_number=request.batch_number or None,
            created_at=now,
            updated_at=now,
        )

        state = self._services.state
        state.add_item(item)
        try:
            await self._services.store.create_item(item)
        except PersistenceError as e:
            state.remove_item(item.id)
            logger.error("item_create_failed", item_id=item.id, error=str(e))
            raise

        logger.info("item_created", item_id=item.id, name=item.name)
        return item

    async def update_item(self, item_id: str, request: UpdateItemRequest) -> InventoryItem:
        current = self.get_item(item_id)
        updated = current.model_copy(
            update={
                "name": request.name.strip(),
                "category": request.category.strip(),
                "quantity": request.quantity,
                "price": request.price,
                "description": request.description,
                "image_ref": request.image_ref,
                "batch_number": request.batch_number or None,
                "updated_at": datetime.now(),
            }
        )

        state = self._services.state
        previous = state.replace_item(updated)
        try:
            await self._services.store.update_item(updated)
        except PersistenceError as e:
            if previous is not None:
                state.replace_item(previous)
            logger.error("item_update_failed", item_id=item_id, error=str(e))
            raise

        logger.info("item_updated", item_id=item_id)
        return updated

    async def delete_item(self, item_id: str) -> None:
        """Delete an item. Its movements stay in the log."""
        state = self._services.state
        position = state.position_of(item_id)
        removed = state.remove_item(item_id)
        if removed is None or position is None:
            raise ItemNotFoundError(item_id)

        try:
            await self._services.store.delete_item(item_id)
        except PersistenceError as e:
            state.add_item(removed, position=position)
            logger.error("item_delete_failed", item_id=item_id, error=str(e))
            raise

        logger.info("item_deleted", item_id=item_id)

    def to_response(self, item: InventoryItem) -> ItemResponse:
        return ItemResponse.from_entity(item, self._threshold)

    def to_list_response(self, items: list[InventoryItem]) -> ItemListResponse:
        return ItemListResponse(
            items=[self.to_response(item) for item in items],
            total=len(items),
        )
