"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.entities.inventory import InventoryItem, StockMovement
from src.core.entities.report import (
    DashboardStats,
    MonthlyBucket,
    MonthlyReport,
    ProductLedgerRow,
)

# --- Items ---


class ItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: str
    name: str
    category: str
    quantity: int
    price: float
    total_value: float
    description: str
    image_ref: str | None = None
    batch_number: str | None = None
    low_stock: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: InventoryItem, low_stock_threshold: int = 5) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            price=item.price,
            total_value=item.total_value,
            description=item.description,
            image_ref=item.image_ref,
            batch_number=item.batch_number,
            low_stock=item.quantity < low_stock_threshold,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ItemListResponse(BaseModel):
    """Item list response."""

    items: list[ItemResponse]
    total: int


# --- Movements ---


class MovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: str
    item_id: str
    item_name: str
    type: str
    quantity: int
    timestamp: datetime
    batch_number: str | None = None
    sale_price: float | None = None
    purchase_price: float | None = None
    synced: bool = True

    @classmethod
    def from_entity(cls, movement: StockMovement, synced: bool = True) -> "MovementResponse":
        return cls(
            id=movement.id,
            item_id=movement.item_id,
            item_name=movement.item_name,
            type=movement.type.value,
            quantity=movement.quantity,
            timestamp=movement.timestamp,
            batch_number=movement.batch_number,
            sale_price=movement.sale_price,
            purchase_price=movement.purchase_price,
            synced=synced,
        )


class MovementListResponse(BaseModel):
    """Movement history response."""

    movements: list[MovementResponse]
    total: int


class MovementResultResponse(BaseModel):
    """Outcome of recording a movement."""

    status: str = Field(..., description="applied or failed")
    item: ItemResponse | None = None
    movement: MovementResponse | None = None
    clone_created: bool = False
    stage: str | None = Field(default=None, description="Write that failed")
    reason: str | None = None
    pending_sync: bool = False


class SyncResponse(BaseModel):
    """Outcome of replaying unsynced movements."""

    synced: list[str]
    pending: list[str]


# --- Reports ---


class CategoryTotalResponse(BaseModel):
    name: str
    value: float


class DashboardResponse(BaseModel):
    """Dashboard KPIs and category chart."""

    total_units: int
    total_value: float
    low_stock_count: int
    total_categories: int
    has_sales: bool
    category_distribution: list[CategoryTotalResponse]

    @classmethod
    def from_entity(cls, stats: DashboardStats) -> "DashboardResponse":
        return cls(
            total_units=stats.total_units,
            total_value=stats.total_value,
            low_stock_count=stats.low_stock_count,
            total_categories=stats.total_categories,
            has_sales=stats.has_sales,
            category_distribution=[
                CategoryTotalResponse(name=c.name, value=c.value)
                for c in stats.category_distribution
            ],
        )


class MonthlyBucketResponse(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    revenue: float
    units_sold: int

    @classmethod
    def from_entity(cls, bucket: MonthlyBucket) -> "MonthlyBucketResponse":
        return cls(month=bucket.key, revenue=bucket.revenue, units_sold=bucket.units_sold)


class ProductLedgerResponse(BaseModel):
    item_id: str
    name: str
    category: str
    bought_qty: int
    invested: float
    sold_qty: int
    revenue: float
    balance: float

    @classmethod
    def from_entity(cls, row: ProductLedgerRow) -> "ProductLedgerResponse":
        return cls(
            item_id=row.item_id,
            name=row.name,
            category=row.category,
            bought_qty=row.bought_qty,
            invested=row.invested,
            sold_qty=row.sold_qty,
            revenue=row.revenue,
            balance=row.balance,
        )


class MonthlyReportResponse(BaseModel):
    """Monthly revenue trend and per-product balance."""

    trend: list[MonthlyBucketResponse]
    products: list[ProductLedgerResponse]
    total_earnings: float
    total_units_sold: int
    total_invested: float

    @classmethod
    def from_entity(cls, report: MonthlyReport) -> "MonthlyReportResponse":
        return cls(
            trend=[MonthlyBucketResponse.from_entity(b) for b in report.trend],
            products=[ProductLedgerResponse.from_entity(r) for r in report.products],
            total_earnings=report.total_earnings,
            total_units_sold=report.total_units_sold,
            total_invested=report.total_invested,
        )


# --- System ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    backend: str | None = None
    unsynced_movements: int = 0


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
