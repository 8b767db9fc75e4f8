"""
Application layer - Use cases, DTOs, and service wiring.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Building the services container for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.dto.requests import (
    BagEntryRequest,
    CreateItemRequest,
    RecordMovementRequest,
    UpdateItemRequest,
)
from src.application.dto.responses import (
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    ItemListResponse,
    ItemResponse,
    MonthlyReportResponse,
    MovementListResponse,
    MovementResponse,
    MovementResultResponse,
    SyncResponse,
)
from src.application.services import InventoryServices, build_services
from src.application.use_cases import (
    BuildReportsUseCase,
    ItemCatalogUseCase,
    RecordMovementUseCase,
)

__all__ = [
    # Request DTOs
    "CreateItemRequest",
    "UpdateItemRequest",
    "BagEntryRequest",
    "RecordMovementRequest",
    # Response DTOs
    "ItemResponse",
    "ItemListResponse",
    "MovementResponse",
    "MovementListResponse",
    "MovementResultResponse",
    "SyncResponse",
    "DashboardResponse",
    "MonthlyReportResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "RecordMovementUseCase",
    "ItemCatalogUseCase",
    "BuildReportsUseCase",
    # Services
    "InventoryServices",
    "build_services",
]
