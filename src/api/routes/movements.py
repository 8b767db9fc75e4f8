"""Stock movement endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_build_reports_use_case, get_record_movement_use_case
from src.application.dto.requests import RecordMovementRequest
from src.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    MovementResultResponse,
    SyncResponse,
)
from src.application.use_cases.build_reports import BuildReportsUseCase
from src.application.use_cases.record_movement import RecordMovementUseCase

router = APIRouter(prefix="/api/movements", tags=["movements"])


@router.post(
    "",
    response_model=MovementResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": MovementResultResponse},
    },
)
async def record_movement(
    request: RecordMovementRequest,
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> MovementResultResponse | JSONResponse:
    """
    Record a stock entry or exit.

    Entries may be given in pieces or as bags. A rejected write returns
    503 with the stage that failed; a movement marked ``pending_sync`` is
    already counted and will be replayed by ``POST /api/movements/sync``.
    """
    result = await use_case.execute(request)
    response = use_case.to_response(result)
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )
    return response


@router.get("", response_model=MovementListResponse)
async def movement_history(
    movement_type: Literal["all", "entry", "exit"] = Query(default="all", alias="type"),
    q: str = Query(default="", description="Match on item name or batch number"),
    use_case: BuildReportsUseCase = Depends(get_build_reports_use_case),
) -> MovementListResponse:
    """Movement history, newest first."""
    return use_case.to_history_response(use_case.history(movement_type=movement_type, query=q))


@router.post("/sync", response_model=SyncResponse)
async def sync_movements(
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> SyncResponse:
    """Replay movements whose insert was never confirmed."""
    report = await use_case.sync()
    return use_case.to_sync_response(report)
