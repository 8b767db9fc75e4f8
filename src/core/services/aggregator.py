"""
Read-side aggregation over the Item Store and Movement Log.

Every function here is pure: it reads the two collections it is given and
returns fresh report objects. Nothing is cached or persisted, so calling a
function twice on unchanged inputs yields equal results.

Movements reference items weakly. When an item has been deleted, revenue
falls back to the movement's own sale price (then zero) and the row or
category falls back to a sentinel label.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from src.core.entities.inventory import InventoryItem, MovementType, StockMovement
from src.core.entities.report import (
    CategoryTotal,
    DashboardStats,
    MonthlyBucket,
    MonthlyReport,
    ProductLedgerRow,
)

UNASSIGNED_CATEGORY = "Otros"
REMOVED_CATEGORY = "Eliminado"
LOW_STOCK_THRESHOLD = 5


def _index(items: Iterable[InventoryItem]) -> dict[str, InventoryItem]:
    return {item.id: item for item in items}


def _exit_unit_price(movement: StockMovement, item: InventoryItem | None) -> float:
    if movement.sale_price is not None:
        return movement.sale_price
    if item is not None:
        return item.price
    return 0.0


def _sorted_totals(totals: dict[str, float]) -> list[CategoryTotal]:
    rows = [CategoryTotal(name=name, value=value) for name, value in totals.items()]
    return sorted(rows, key=lambda row: row.value, reverse=True)


def category_distribution(
    items: Sequence[InventoryItem],
    movements: Sequence[StockMovement],
    unassigned_category: str = UNASSIGNED_CATEGORY,
) -> list[CategoryTotal]:
    """
    Exit revenue per category, highest first.

    With no exits at all, falls back to current stock value per category so
    a fresh catalog still has something to chart.
    """
    by_id = _index(items)
    exits = [m for m in movements if m.type == MovementType.EXIT]

    totals: dict[str, float] = {}
    if exits:
        for move in exits:
            item = by_id.get(move.item_id)
            category = item.category if item is not None else unassigned_category
            revenue = move.quantity * _exit_unit_price(move, item)
            totals[category] = totals.get(category, 0.0) + revenue
    else:
        for item in items:
            totals[item.category] = totals.get(item.category, 0.0) + item.total_value

    return _sorted_totals(totals)


def monthly_trend(
    items: Sequence[InventoryItem],
    movements: Sequence[StockMovement],
) -> list[MonthlyBucket]:
    """Exit revenue and units per calendar month, oldest month first."""
    by_id = _index(items)
    buckets: dict[tuple[int, int], MonthlyBucket] = {}

    for move in movements:
        if move.type != MovementType.EXIT:
            continue
        key = (move.timestamp.year, move.timestamp.month)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = MonthlyBucket(year=key[0], month=key[1])
            buckets[key] = bucket
        bucket.revenue += move.quantity * _exit_unit_price(move, by_id.get(move.item_id))
        bucket.units_sold += move.quantity

    return [buckets[key] for key in sorted(buckets)]


def product_ledger(
    items: Sequence[InventoryItem],
    movements: Sequence[StockMovement],
    removed_category: str = REMOVED_CATEGORY,
) -> list[ProductLedgerRow]:
    """
    Bought/invested vs sold/revenue per product, highest revenue first.

    Unknown purchase prices count as zero investment; they are never
    estimated. Rows without any entry or exit are left out.
    """
    by_id = _index(items)
    rows: dict[str, ProductLedgerRow] = {
        item.id: ProductLedgerRow(item_id=item.id, name=item.name, category=item.category)
        for item in items
    }

    for move in movements:
        row = rows.get(move.item_id)
        if row is None:
            row = ProductLedgerRow(
                item_id=move.item_id,
                name=move.item_name,
                category=removed_category,
            )
            rows[move.item_id] = row

        if move.type == MovementType.ENTRY:
            row.bought_qty += move.quantity
            row.invested += move.quantity * (move.purchase_price or 0.0)
        else:
            row.sold_qty += move.quantity
            row.revenue += move.quantity * _exit_unit_price(move, by_id.get(move.item_id))

    active = [row for row in rows.values() if row.has_activity]
    return sorted(active, key=lambda row: row.revenue, reverse=True)


def low_stock_items(
    items: Sequence[InventoryItem],
    threshold: int = LOW_STOCK_THRESHOLD,
) -> list[InventoryItem]:
    return [item for item in items if item.quantity < threshold]


def dashboard_stats(
    items: Sequence[InventoryItem],
    movements: Sequence[StockMovement],
    low_stock_threshold: int = LOW_STOCK_THRESHOLD,
    unassigned_category: str = UNASSIGNED_CATEGORY,
) -> DashboardStats:
    """KPI totals for the current catalog plus the category chart."""
    return DashboardStats(
        total_units=sum(item.quantity for item in items),
        total_value=sum(item.total_value for item in items),
        low_stock_count=len(low_stock_items(items, low_stock_threshold)),
        total_categories=len({item.category for item in items}),
        has_sales=any(m.type == MovementType.EXIT for m in movements),
        category_distribution=category_distribution(
            items, movements, unassigned_category=unassigned_category
        ),
    )


def monthly_report(
    items: Sequence[InventoryItem],
    movements: Sequence[StockMovement],
    removed_category: str = REMOVED_CATEGORY,
) -> MonthlyReport:
    trend = monthly_trend(items, movements)
    products = product_ledger(items, movements, removed_category=removed_category)
    return MonthlyReport(
        trend=trend,
        products=products,
        total_earnings=sum(bucket.revenue for bucket in trend),
        total_units_sold=sum(bucket.units_sold for bucket in trend),
        total_invested=sum(row.invested for row in products),
    )


def search_items(
    items: Sequence[InventoryItem],
    query: str = "",
    category: str | None = None,
    low_stock_only: bool = False,
    low_stock_threshold: int = LOW_STOCK_THRESHOLD,
) -> list[InventoryItem]:
    """Case-insensitive match on name or description, plus optional filters."""
    needle = query.lower()
    result = []
    for item in items:
        if needle and needle not in item.name.lower() and needle not in item.description.lower():
            continue
        if category and item.category != category:
            continue
        if low_stock_only and item.quantity >= low_stock_threshold:
            continue
        result.append(item)
    return result


def movement_history(
    movements: Sequence[StockMovement],
    movement_type: Literal["all", "entry", "exit"] = "all",
    query: str = "",
) -> list[StockMovement]:
    """Newest-first log filtered by direction and item name / batch number."""
    needle = query.lower()
    ordered = sorted(movements, key=lambda m: m.timestamp, reverse=True)
    result = []
    for move in ordered:
        if movement_type != "all" and move.type.value != movement_type:
            continue
        if needle:
            in_name = needle in move.item_name.lower()
            in_batch = bool(move.batch_number) and needle in move.batch_number.lower()  # type: ignore[union-attr]
            if not (in_name or in_batch):
                continue
        result.append(move)
    return result
