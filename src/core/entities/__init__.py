"""Core domain entities."""

from src.core.entities.inventory import (
    InventoryItem,
    MovementType,
    StockMovement,
    new_id,
)
from src.core.entities.report import (
    CategoryTotal,
    DashboardStats,
    MonthlyBucket,
    MonthlyReport,
    ProductLedgerRow,
)

__all__ = [
    # Inventory
    "InventoryItem",
    "MovementType",
    "StockMovement",
    "new_id",
    # Reports
    "CategoryTotal",
    "DashboardStats",
    "MonthlyBucket",
    "MonthlyReport",
    "ProductLedgerRow",
]
