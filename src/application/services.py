"""
Service wiring for dependency injection.

Builds the storage backend, loads the session state from it and hands
both to the movement processor. Use cases receive the resulting
``InventoryServices`` container; the API keeps one on ``app.state``.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from dataclasses import dataclass

from src.config import get_logger, get_settings
from src.config.settings import Settings
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services import InventoryState, MovementProcessor

logger = get_logger(__name__)


@dataclass
class InventoryServices:
    """Everything one session needs to read and mutate the inventory."""

    store: IInventoryStore
    state: InventoryState
    processor: MovementProcessor
    settings: Settings

    @property
    def backend(self) -> str:
        return self.store.name

    async def close(self) -> None:
        """Release backend resources (HTTP client or connection pool)."""
        await self.store.close()
        logger.info("inventory_services_closed", backend=self.backend)


async def build_services(
    store: IInventoryStore | None = None,
    settings: Settings | None = None,
) -> InventoryServices:
    """
    Create the store (unless given), load state and wire the processor.

    Args:
        store: Optional store override; selected from settings otherwise
        settings: Optional settings override

    Returns:
        Ready-to-use InventoryServices

    Raises:
        PersistenceError: the initial fetch failed
    """
    settings = settings or get_settings()

    if store is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.storage import create_inventory_store

        store = create_inventory_store(settings)

    state = await InventoryState.load(store)
    processor = MovementProcessor(
        state=state,
        store=store,
        entry_time=settings.inventory.entry_time_of_day,
    )
    logger.info("inventory_services_ready", backend=store.name)
    return InventoryServices(
        store=store,
        state=state,
        processor=processor,
        settings=settings,
    )


__all__ = [
    "InventoryServices",
    "build_services",
]
