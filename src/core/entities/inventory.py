"""Inventory domain entities."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


def new_id() -> str:
    """Opaque client-generated identifier."""
    return uuid.uuid4().hex


class MovementType(str, Enum):
    """Direction of a stock movement."""

    ENTRY = "entry"
    EXIT = "exit"


class InventoryItem(BaseModel):
    """A catalog product with its live stock quantity."""

    id: str = Field(default_factory=new_id)
    name: str
    category: str
    quantity: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)
    description: str = ""
    image_ref: str | None = None
    batch_number: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def total_value(self) -> float:
        """Stock value at the current price."""
        return self.quantity * self.price

    def touch(self) -> None:
        self.updated_at = datetime.now()


class StockMovement(BaseModel):
    """One append-only ledger entry (entry or exit)."""

    id: str = Field(default_factory=new_id)
    item_id: str
    item_name: str  # snapshot at recording time
    type: MovementType
    quantity: int = Field(gt=0)
    timestamp: datetime = Field(default_factory=datetime.now)
    batch_number: str | None = None
    sale_price: float | None = None  # exits only
    purchase_price: float | None = None  # entries only

    @property
    def is_entry(self) -> bool:
        return self.type == MovementType.ENTRY

    @property
    def is_exit(self) -> bool:
        return self.type == MovementType.EXIT
