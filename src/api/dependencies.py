"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. The services container is
built once in the application lifespan and kept on ``app.state``.
"""

from fastapi import Depends, Request, status
from starlette.exceptions import HTTPException

from src.application.services import InventoryServices
from src.application.use_cases import (
    BuildReportsUseCase,
    ItemCatalogUseCase,
    RecordMovementUseCase,
)


def get_services(request: Request) -> InventoryServices:
    """Services container loaded at startup."""
    services: InventoryServices | None = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory is not loaded yet",
        )
    return services


# Use case dependencies
def get_record_movement_use_case(
    services: InventoryServices = Depends(get_services),
) -> RecordMovementUseCase:
    return RecordMovementUseCase(services)


def get_item_catalog_use_case(
    services: InventoryServices = Depends(get_services),
) -> ItemCatalogUseCase:
    return ItemCatalogUseCase(services)


def get_build_reports_use_case(
    services: InventoryServices = Depends(get_services),
) -> BuildReportsUseCase:
    return BuildReportsUseCase(services)
