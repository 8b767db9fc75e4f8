"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.items import router as items_router
from src.api.routes.movements import router as movements_router
from src.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "items_router",
    "movements_router",
    "reports_router",
]
