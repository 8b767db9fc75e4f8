"""
FastAPI application factory for the inventory service.

Run locally with ``python -m src.api.main`` or ``uvicorn src.api.main:app``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    health_router,
    items_router,
    movements_router,
    reports_router,
)
from src.api.routes.health import build_health
from src.application.dto.responses import HealthResponse
from src.application.services import InventoryServices, build_services
from src.config import Settings, configure_logging, get_logger, get_settings
from src.infrastructure.storage import create_inventory_store

logger = get_logger(__name__)


async def open_services(settings: Settings) -> InventoryServices:
    """Pick the backend, migrate it if local, and load the inventory."""
    store = create_inventory_store(settings)

    try:
        if store.name == "sqlite":
            from src.infrastructure.storage.sqlite.migrations import run_migrations

            await run_migrations(settings.storage.db_path)
            logger.info("database_initialized", db_path=str(settings.storage.db_path))

        return await build_services(store=store, settings=settings)
    except Exception as e:
        logger.error("inventory_load_failed", backend=store.name, error=str(e))
        await store.close()
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging()
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    app.state.services = await open_services(settings)
    logger.info("application_started", backend=app.state.services.backend)

    try:
        yield
    finally:
        services, app.state.services = app.state.services, None
        try:
            await services.close()
        except Exception as e:
            logger.warning("storage_close_failed", error=str(e))
        logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with middleware, error handlers and routers attached."""
    settings = settings or get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Inventory items, stock movements and sales reports",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )
    app.state.services = None

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    for router in (health_router, items_router, movements_router, reports_router):
        app.include_router(router)

    # Container probes hit /health without the /api prefix
    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def root_health(request: Request) -> HealthResponse:
        return build_health(request)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "name": f"{settings.app_name} API",
            "version": settings.app_version,
            "docs": "/docs" if settings.api.debug else "",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
