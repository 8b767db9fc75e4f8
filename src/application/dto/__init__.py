"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    BagEntryRequest,
    CreateItemRequest,
    RecordMovementRequest,
    UpdateItemRequest,
)
from src.application.dto.responses import (
    CategoryTotalResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    ItemListResponse,
    ItemResponse,
    MonthlyBucketResponse,
    MonthlyReportResponse,
    MovementListResponse,
    MovementResponse,
    MovementResultResponse,
    ProductLedgerResponse,
    SyncResponse,
)

__all__ = [
    # Requests
    "CreateItemRequest",
    "UpdateItemRequest",
    "BagEntryRequest",
    "RecordMovementRequest",
    # Responses
    "ItemResponse",
    "ItemListResponse",
    "MovementResponse",
    "MovementListResponse",
    "MovementResultResponse",
    "SyncResponse",
    "CategoryTotalResponse",
    "DashboardResponse",
    "MonthlyBucketResponse",
    "ProductLedgerResponse",
    "MonthlyReportResponse",
    "HealthResponse",
    "ErrorResponse",
]
