"""Report endpoints: dashboard and monthly report."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_build_reports_use_case
from src.application.dto.responses import DashboardResponse, MonthlyReportResponse
from src.application.use_cases.build_reports import BuildReportsUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    use_case: BuildReportsUseCase = Depends(get_build_reports_use_case),
) -> DashboardResponse:
    """Stock totals and revenue by category."""
    return use_case.to_dashboard_response(use_case.dashboard())


@router.get("/monthly", response_model=MonthlyReportResponse)
async def monthly_report(
    use_case: BuildReportsUseCase = Depends(get_build_reports_use_case),
) -> MonthlyReportResponse:
    """Revenue by month and the per-product investment balance."""
    return use_case.to_monthly_response(use_case.monthly())
