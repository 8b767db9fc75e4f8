"""Record Movement Use Case: stock entry or exit through the processor."""

from src.application.dto.requests import RecordMovementRequest
from src.application.dto.responses import (
    ItemResponse,
    MovementResponse,
    MovementResultResponse,
    SyncResponse,
)
from src.application.services import InventoryServices
from src.config import get_logger
from src.core.exceptions import InvalidBagConfigurationError, InvalidQuantityError
from src.core.services import (
    Applied,
    BagEntry,
    MovementRequest,
    MovementResult,
    SyncReport,
)

logger = get_logger(__name__)


class RecordMovementUseCase:
    """Validate a movement request and hand it to the movement processor."""

    def __init__(self, services: InventoryServices):
        self._services = services

    async def execute(self, request: RecordMovementRequest) -> MovementResult:
        """Execute record movement use case."""
        if request.bags is not None and request.quantity is not None:
            raise InvalidBagConfigurationError(
                "bags", "Give either a piece quantity or a bag entry, not both"
            )
        if request.bags is None and request.quantity is None:
            raise InvalidQuantityError(None)

        bags = None
        if request.bags is not None:
            bags = BagEntry(
                containers=request.bags.containers,
                units_per_container=request.bags.units_per_container,
                cost_per_container=request.bags.cost_per_container,
            )

        result = await self._services.processor.apply(
            MovementRequest(
                item_id=request.item_id,
                type=request.type,
                quantity=request.quantity,
                batch_number=request.batch_number,
                entry_date=request.entry_date,
                sale_price=request.sale_price,
                purchase_price=request.purchase_price,
                bags=bags,
            )
        )

        if not result.ok:
            logger.warning(
                "record_movement_failed",
                item_id=request.item_id,
                stage=result.stage,  # type: ignore[union-attr]
            )
        return result

    async def sync(self) -> SyncReport:
        """Replay movements left unsynced by earlier failures."""
        return await self._services.processor.sync_pending()

    def to_response(self, result: MovementResult) -> MovementResultResponse:
        """Convert result to API response."""
        threshold = self._services.settings.inventory.low_stock_threshold
        state = self._services.state

        item = ItemResponse.from_entity(result.item, threshold) if result.item else None
        movement = (
            MovementResponse.from_entity(
                result.movement, synced=not state.is_unsynced(result.movement.id)
            )
            if result.movement
            else None
        )

        if isinstance(result, Applied):
            return MovementResultResponse(
                status="applied",
                item=item,
                movement=movement,
                clone_created=result.clone_created,
            )
        return MovementResultResponse(
            status="failed",
            item=item,
            movement=movement,
            stage=result.stage,
            reason=result.reason,
            pending_sync=result.pending_sync,
        )

    @staticmethod
    def to_sync_response(report: SyncReport) -> SyncResponse:
        return SyncResponse(synced=report.synced, pending=report.pending)
