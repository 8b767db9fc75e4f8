"""Read-side report entities derived from items and movements."""

from pydantic import BaseModel


class CategoryTotal(BaseModel):
    """Value attributed to one category."""

    name: str
    value: float


class MonthlyBucket(BaseModel):
    """Exit revenue and units for one calendar month."""

    year: int
    month: int
    revenue: float = 0.0
    units_sold: int = 0

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class ProductLedgerRow(BaseModel):
    """Invested-vs-sold balance for one product row."""

    item_id: str
    name: str
    category: str
    bought_qty: int = 0
    invested: float = 0.0
    sold_qty: int = 0
    revenue: float = 0.0

    @property
    def balance(self) -> float:
        return self.revenue - self.invested

    @property
    def has_activity(self) -> bool:
        return self.bought_qty > 0 or self.sold_qty > 0


class DashboardStats(BaseModel):
    """KPI cards and category chart for the dashboard."""

    total_units: int
    total_value: float
    low_stock_count: int
    total_categories: int
    has_sales: bool
    category_distribution: list[CategoryTotal]


class MonthlyReport(BaseModel):
    """Monthly trend, per-product ledger and their totals."""

    trend: list[MonthlyBucket]
    products: list[ProductLedgerRow]
    total_earnings: float
    total_units_sold: int
    total_invested: float
