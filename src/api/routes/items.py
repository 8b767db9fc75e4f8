"""Item catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_item_catalog_use_case
from src.application.dto.requests import CreateItemRequest, UpdateItemRequest
from src.application.dto.responses import ErrorResponse, ItemListResponse, ItemResponse
from src.application.use_cases.manage_items import ItemCatalogUseCase

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=ItemListResponse)
async def list_items(
    q: str = Query(default="", description="Match on name or description"),
    category: str | None = Query(default=None),
    low_stock: bool = Query(default=False, description="Only items below the threshold"),
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> ItemListResponse:
    """List items, newest first, with optional search and filters."""
    items = use_case.list_items(query=q, category=category, low_stock_only=low_stock)
    return use_case.to_list_response(items)


@router.get("/low-stock", response_model=ItemListResponse)
async def list_low_stock(
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> ItemListResponse:
    """Items whose quantity is below the low-stock threshold."""
    return use_case.to_list_response(use_case.list_items(low_stock_only=True))


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: str,
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> ItemResponse:
    return use_case.to_response(use_case.get_item(item_id))


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateItemRequest,
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> ItemResponse:
    """Add a product to the catalog."""
    item = await use_case.create_item(request)
    return use_case.to_response(item)


@router.put(
    "/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def update_item(
    item_id: str,
    request: UpdateItemRequest,
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> ItemResponse:
    """Edit an item in place."""
    item = await use_case.update_item(item_id, request)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: str,
    use_case: ItemCatalogUseCase = Depends(get_item_catalog_use_case),
) -> None:
    """Delete an item. Its movements stay in the history and reports."""
    await use_case.delete_item(item_id)
