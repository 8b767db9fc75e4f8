"""
Error handling for the inventory API.

Every failure leaves the API as an ErrorResponse body carrying a stable
``error_code``, a readable ``message`` and a ``hint`` for the client.
Domain errors keep their own code; anything else is named after its class.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    ConfigurationError,
    ItemNotFoundError,
    PersistenceError,
    StockLedgerError,
    StorageRejectedError,
    StorageUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)


# Checked in order, so subclasses come before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageRejectedError: status.HTTP_502_BAD_GATEWAY,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

HINT_MAP: dict[str, str] = {
    "ITEM_NOT_FOUND": "Check the item ID; GET /api/items lists the catalog.",
    "INVALID_QUANTITY": "Quantity must be a whole number of pieces greater than zero.",
    "INVALID_BAG_CONFIGURATION": (
        "Bag entries need positive containers and units_per_container, "
        "and are only accepted for entries."
    ),
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "STORAGE_UNAVAILABLE": "The storage backend is unreachable. Retry later.",
    "STORAGE_REJECTED": "The storage backend refused the write. Reload and try again.",
    "PERSISTENCE_ERROR": "A storage operation failed. Check server logs.",
    "SERVICE_UNAVAILABLE": "The inventory is still loading. Retry in a moment.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found.",
    405: "This endpoint does not accept that method.",
    500: "An internal error occurred. Check server logs.",
    502: "The storage backend rejected the request.",
    503: "The service is temporarily unavailable. Retry later.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
    503: "SERVICE_UNAVAILABLE",
}


def _get_hint(error_code: str, status_code: int) -> str:
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Turn any exception into an ErrorResponse, logging it on the way."""
    status_code = _status_for(exc)
    if isinstance(exc, StockLedgerError):
        error_code, message = exc.code, exc.message
    else:
        error_code, message = type(exc).__name__, str(exc)

    unexpected = status_code >= 500 and not isinstance(exc, PersistenceError)
    (logger.error if status_code >= 500 else logger.warning)(
        "request_error",
        path=request.url.path,
        status=status_code,
        error_code=error_code,
        error=message,
        traceback=traceback.format_exc() if unexpected else None,
    )
    return _error_json(request, status_code, error_code, message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(StockLedgerError)
    async def domain_exception_handler(
        request: Request, exc: StockLedgerError
    ) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.warning("request_invalid", path=request.url.path, problems=problems)
        return _error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        return _error_json(
            request, exc.status_code, error_code, str(exc.detail or "An error occurred")
        )
