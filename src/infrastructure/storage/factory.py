"""
Storage backend selection.

The remote database is used when its settings are valid; otherwise the
service falls back to the local SQLite file. The core only ever sees
``IInventoryStore``.
"""

from src.config import get_logger, get_settings
from src.config.settings import Settings
from src.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


def create_inventory_store(settings: Settings | None = None) -> IInventoryStore:
    """Build the backend selected by configuration validity."""
    settings = settings or get_settings()

    if settings.remote.is_configured:
        from src.infrastructure.storage.remote import RestInventoryStore

        logger.info("storage_backend_selected", backend="remote", url=settings.remote.url)
        return RestInventoryStore(settings.remote)

    from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteInventoryStore

    logger.info(
        "storage_backend_selected",
        backend="sqlite",
        db_path=str(settings.storage.db_path),
        reason="remote settings missing or invalid",
    )
    return SQLiteInventoryStore(pool=ConnectionPool.from_settings(settings.storage))
