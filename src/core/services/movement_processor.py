"""
Movement Processor.

Applies one stock movement to the Item Store and Movement Log:

1. resolve the target row (batch redirect or batch clone),
2. update its quantity,
3. append the ledger entry.

Every step is a two-phase write: the change is applied to the in-memory
state, sent to the backend, and confirmed or rolled back on the response.
A movement insert that fails after the item write succeeded cannot be
rolled back cleanly, so the movement is kept and marked unsynced for
``sync_pending`` to replay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import ClassVar

from src.config import get_logger
from src.core.entities.inventory import (
    InventoryItem,
    MovementType,
    StockMovement,
    new_id,
)
from src.core.exceptions import (
    InvalidBagConfigurationError,
    InvalidQuantityError,
    ItemNotFoundError,
    PersistenceError,
)
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.inventory_state import InventoryState

logger = get_logger(__name__)

DEFAULT_ENTRY_TIME = time(12, 0)


@dataclass
class BagEntry:
    """An entry expressed as containers of a fixed number of pieces."""

    containers: int
    units_per_container: int
    cost_per_container: float | None = None


def convert_bags(bags: BagEntry) -> tuple[int, float | None]:
    """
    Convert a bag entry into piece quantity and per-piece cost.

    Returns:
        ``(containers * units_per_container, cost_per_container / units_per_container)``;
        the cost is ``None`` when no positive container cost was given.
    """
    if not _is_positive_int(bags.units_per_container):
        raise InvalidBagConfigurationError(
            "units_per_container",
            "Pieces per container must be a positive integer",
            bags.units_per_container,
        )
    if not _is_positive_int(bags.containers):
        raise InvalidBagConfigurationError(
            "containers",
            "Number of containers must be a positive integer",
            bags.containers,
        )

    quantity = bags.containers * bags.units_per_container
    unit_cost = None
    if bags.cost_per_container is not None and bags.cost_per_container > 0:
        unit_cost = bags.cost_per_container / bags.units_per_container
    return quantity, unit_cost


@dataclass
class MovementRequest:
    """A movement as requested by a caller, before bag conversion."""

    item_id: str
    type: MovementType
    quantity: int | None = None
    batch_number: str | None = None
    entry_date: date | None = None
    sale_price: float | None = None
    purchase_price: float | None = None
    bags: BagEntry | None = None


@dataclass
class Applied:
    """Every write of the movement was confirmed by the backend."""

    item: InventoryItem
    movement: StockMovement
    clone_created: bool = False

    ok: ClassVar[bool] = True


@dataclass
class Failed:
    """A write was rejected; see ``stage`` for how far the movement got."""

    reason: str
    stage: str  # "clone" | "item_update" | "movement"
    error: PersistenceError | None = None
    item: InventoryItem | None = None
    movement: StockMovement | None = None
    pending_sync: bool = False

    ok: ClassVar[bool] = False


MovementResult = Applied | Failed


@dataclass
class SyncReport:
    """Outcome of replaying unsynced movements."""

    synced: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class MovementProcessor:
    """Single entry point for recording stock entries and exits."""

    def __init__(
        self,
        state: InventoryState,
        store: IInventoryStore,
        entry_time: time = DEFAULT_ENTRY_TIME,
    ) -> None:
        self._state = state
        self._store = store
        self._entry_time = entry_time

    @property
    def state(self) -> InventoryState:
        return self._state

    async def apply(self, request: MovementRequest) -> MovementResult:
        """Resolve the request's item, convert bags, and record the movement."""
        item = self._state.get_item(request.item_id)
        if item is None:
            raise ItemNotFoundError(request.item_id)

        quantity = request.quantity
        purchase_price = request.purchase_price
        if request.bags is not None:
            if request.type != MovementType.ENTRY:
                raise InvalidBagConfigurationError(
                    "bags", "Bag quantities are only accepted for entries"
                )
            quantity, purchase_price = convert_bags(request.bags)

        return await self.record(
            item,
            request.type,
            quantity,  # type: ignore[arg-type]
            batch_number=request.batch_number,
            entry_date=request.entry_date,
            sale_price=request.sale_price,
            purchase_price=purchase_price,
        )

    async def record(
        self,
        item: InventoryItem,
        direction: MovementType,
        quantity: int,
        *,
        batch_number: str | None = None,
        entry_date: date | None = None,
        sale_price: float | None = None,
        purchase_price: float | None = None,
    ) -> MovementResult:
        """
        Record one movement against ``item``.

        Raises:
            InvalidQuantityError: quantity is not a positive integer.
            ItemNotFoundError: ``item`` is not in the Item Store.
        """
        if not _is_positive_int(quantity):
            raise InvalidQuantityError(quantity)

        selected = self._state.get_item(item.id)
        if selected is None:
            raise ItemNotFoundError(item.id)

        batch_number = batch_number or None
        is_entry = direction == MovementType.ENTRY

        logger.info(
            "movement_started",
            item_id=selected.id,
            type=direction.value,
            quantity=quantity,
            batch_number=batch_number,
        )

        # 1. Target resolution
        target = selected
        clone_created = False
        if is_entry and batch_number and batch_number != selected.batch_number:
            existing = self._state.find_batch(selected.name, batch_number)
            if existing is not None:
                target = existing
                logger.info(
                    "movement_batch_redirected",
                    from_item=selected.id,
                    to_item=existing.id,
                    batch_number=batch_number,
                )
            else:
                clone = self._clone_for_batch(selected, batch_number)
                self._state.add_item(clone)
                try:
                    await self._store.create_item(clone)
                except PersistenceError as e:
                    self._state.remove_item(clone.id)
                    logger.error("batch_clone_failed", item_id=clone.id, error=str(e))
                    return Failed(reason=e.message, stage="clone", error=e)
                target = clone
                clone_created = True
                logger.info(
                    "batch_clone_created",
                    source_item=selected.id,
                    item_id=clone.id,
                    batch_number=batch_number,
                )

        # 2. Quantity update
        if is_entry:
            new_quantity = target.quantity + quantity
        else:
            new_quantity = max(0, target.quantity - quantity)
            if quantity > target.quantity:
                logger.warning(
                    "exit_clamped",
                    item_id=target.id,
                    requested=quantity,
                    available=target.quantity,
                )

        updated = target.model_copy(
            update={"quantity": new_quantity, "updated_at": datetime.now()}
        )
        previous = self._state.replace_item(updated)
        try:
            await self._store.update_item(updated)
        except PersistenceError as e:
            if previous is not None:
                self._state.replace_item(previous)
            logger.error("item_update_failed", item_id=updated.id, error=str(e))
            return Failed(
                reason=e.message,
                stage="item_update",
                error=e,
                item=previous,
            )

        # 3. Ledger append
        movement = StockMovement(
            id=new_id(),
            item_id=updated.id,
            item_name=updated.name,
            type=direction,
            quantity=quantity,
            timestamp=self._timestamp(direction, entry_date),
            batch_number=batch_number or updated.batch_number,
            sale_price=None if is_entry else sale_price,
            purchase_price=purchase_price if is_entry else None,
        )
        self._state.append_movement(movement)
        try:
            await self._store.create_movement(movement)
        except PersistenceError as e:
            self._state.mark_unsynced(movement.id)
            logger.error(
                "movement_insert_failed",
                movement_id=movement.id,
                item_id=updated.id,
                error=str(e),
            )
            return Failed(
                reason=e.message,
                stage="movement",
                error=e,
                item=updated,
                movement=movement,
                pending_sync=True,
            )

        logger.info(
            "movement_complete",
            movement_id=movement.id,
            item_id=updated.id,
            new_quantity=updated.quantity,
            clone_created=clone_created,
        )
        return Applied(item=updated, movement=movement, clone_created=clone_created)

    async def sync_pending(self) -> SyncReport:
        """Replay movements whose insert was never confirmed."""
        report = SyncReport()
        for movement in self._state.unsynced_movements:
            try:
                await self._store.create_movement(movement)
            except PersistenceError as e:
                report.pending.append(movement.id)
                logger.warning(
                    "movement_resync_failed", movement_id=movement.id, error=str(e)
                )
                continue
            self._state.mark_synced(movement.id)
            report.synced.append(movement.id)

        logger.info(
            "movement_resync_complete",
            synced=len(report.synced),
            pending=len(report.pending),
        )
        return report

    def _timestamp(self, direction: MovementType, entry_date: date | None) -> datetime:
        if direction == MovementType.ENTRY and entry_date is not None:
            return datetime.combine(entry_date, self._entry_time)
        return datetime.now()

    @staticmethod
    def _clone_for_batch(source: InventoryItem, batch_number: str) -> InventoryItem:
        now = datetime.now()
        return source.model_copy(
            update={
                "id": new_id(),
                "quantity": 0,
                "batch_number": batch_number,
                "created_at": now,
                "updated_at": now,
            }
        )
