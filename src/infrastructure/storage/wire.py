"""
Storage wire schema.

Both backends exchange snake_case records with epoch-millisecond
timestamps. This module only renames fields and coerces types; it holds no
inventory rules.
"""

from datetime import datetime
from typing import Any

from src.core.entities.inventory import InventoryItem, MovementType, StockMovement


def to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_millis(value: Any) -> datetime:
    if value is None or value == "":
        return datetime.now()
    return datetime.fromtimestamp(float(value) / 1000)


def _int(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(float(value))


def _float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def _optional_price(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def item_to_record(item: InventoryItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "quantity": item.quantity,
        "price": item.price,
        "description": item.description,
        "image_url": item.image_ref or "",
        "created_at": to_millis(item.created_at),
        "updated_at": to_millis(item.updated_at),
        "batch_number": item.batch_number,
    }


def item_from_record(record: dict[str, Any]) -> InventoryItem:
    return InventoryItem(
        id=str(record["id"]),
        name=record.get("name") or "",
        category=record.get("category") or "",
        quantity=max(0, _int(record.get("quantity"))),
        price=_float(record.get("price")),
        description=record.get("description") or "",
        image_ref=_optional_str(record.get("image_url")),
        batch_number=_optional_str(record.get("batch_number")),
        created_at=from_millis(record.get("created_at")),
        updated_at=from_millis(record.get("updated_at")),
    )


def movement_to_record(movement: StockMovement) -> dict[str, Any]:
    return {
        "id": movement.id,
        "item_id": movement.item_id,
        "item_name": movement.item_name,
        "type": movement.type.value,
        "quantity": movement.quantity,
        "timestamp": to_millis(movement.timestamp),
        "batch_number": movement.batch_number,
        "sale_price": movement.sale_price,
        "purchase_price": movement.purchase_price,
    }


def movement_from_record(record: dict[str, Any]) -> StockMovement:
    return StockMovement(
        id=str(record["id"]),
        item_id=str(record["item_id"]),
        item_name=record.get("item_name") or "",
        type=MovementType(record["type"]),
        quantity=_int(record.get("quantity")),
        timestamp=from_millis(record.get("timestamp")),
        batch_number=_optional_str(record.get("batch_number")),
        sale_price=_optional_price(record.get("sale_price")),
        purchase_price=_optional_price(record.get("purchase_price")),
    )
