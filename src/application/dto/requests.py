"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field

from src.core.entities.inventory import MovementType

# --- Items ---


class CreateItemRequest(BaseModel):
    """Request to add a product to the catalog."""

    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, examples=["Dulcería", "Jarcería"])
    quantity: int = Field(default=0, ge=0, description="Initial stock in pieces")
    price: float = Field(default=0.0, ge=0, description="Current sale price per piece")
    description: str = Field(default="", description="Free-text description")
    image_ref: str | None = Field(default=None, description="Opaque image reference")
    batch_number: str | None = Field(default=None, description="Lot identifier")


class UpdateItemRequest(CreateItemRequest):
    """Full replacement of an item's editable fields."""


# --- Movements ---


class BagEntryRequest(BaseModel):
    """An entry expressed as N containers of K pieces at cost C per container."""

    containers: int = Field(..., description="Number of containers (N)")
    units_per_container: int = Field(..., description="Pieces per container (K)")
    cost_per_container: float | None = Field(
        default=None,
        ge=0,
        description="Purchase cost of one container (C)",
    )


class RecordMovementRequest(BaseModel):
    """Request to record a stock entry or exit.

    Give either ``quantity`` (pieces) or ``bags`` (entries only).
    """

    item_id: str = Field(..., description="Selected item ID")
    type: MovementType = Field(..., description="entry or exit")
    quantity: int | None = Field(default=None, description="Quantity in pieces")
    bags: BagEntryRequest | None = Field(default=None, description="Bag/container entry")
    batch_number: str | None = Field(
        default=None,
        description="Lot identifier; a new one on an entry splits the item by batch",
    )
    entry_date: date | None = Field(
        default=None,
        description="Backdate an entry to this day (recorded at 12:00 local time)",
    )
    sale_price: float | None = Field(default=None, ge=0, description="Unit sale price (exits)")
    purchase_price: float | None = Field(
        default=None, ge=0, description="Unit purchase price (entries)"
    )
