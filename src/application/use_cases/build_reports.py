"""Build Reports Use Case: read-only views over the session state."""

from typing import Literal

from src.application.dto.responses import (
    DashboardResponse,
    MonthlyReportResponse,
    MovementListResponse,
    MovementResponse,
)
from src.application.services import InventoryServices
from src.core.entities.inventory import InventoryItem, StockMovement
from src.core.entities.report import DashboardStats, MonthlyReport
from src.core.services import aggregator


class BuildReportsUseCase:
    """Dashboard, monthly report, low-stock list and movement history."""

    def __init__(self, services: InventoryServices):
        self._services = services
        self._inventory = services.settings.inventory

    def dashboard(self) -> DashboardStats:
        state = self._services.state
        return aggregator.dashboard_stats(
            state.items,
            state.movements,
            low_stock_threshold=self._inventory.low_stock_threshold,
            unassigned_category=self._inventory.unassigned_category,
        )

    def monthly(self) -> MonthlyReport:
        state = self._services.state
        return aggregator.monthly_report(
            state.items,
            state.movements,
            removed_category=self._inventory.removed_category,
        )

    def low_stock(self) -> list[InventoryItem]:
        return aggregator.low_stock_items(
            self._services.state.items,
            threshold=self._inventory.low_stock_threshold,
        )

    def history(
        self,
        movement_type: Literal["all", "entry", "exit"] = "all",
        query: str = "",
    ) -> list[StockMovement]:
        return aggregator.movement_history(
            self._services.state.movements,
            movement_type=movement_type,
            query=query,
        )

    def to_history_response(self, movements: list[StockMovement]) -> MovementListResponse:
        state = self._services.state
        return MovementListResponse(
            movements=[
                MovementResponse.from_entity(m, synced=not state.is_unsynced(m.id))
                for m in movements
            ],
            total=len(movements),
        )

    @staticmethod
    def to_dashboard_response(stats: DashboardStats) -> DashboardResponse:
        return DashboardResponse.from_entity(stats)

    @staticmethod
    def to_monthly_response(report: MonthlyReport) -> MonthlyReportResponse:
        return MonthlyReportResponse.from_entity(report)
