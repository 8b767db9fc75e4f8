"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services import aggregator
from src.core.services.inventory_state import InventoryState
from src.core.services.movement_processor import (
    Applied,
    BagEntry,
    Failed,
    MovementProcessor,
    MovementRequest,
    MovementResult,
    SyncReport,
    convert_bags,
)

__all__ = [
    # State
    "InventoryState",
    # Movement Processor
    "MovementProcessor",
    "MovementRequest",
    "MovementResult",
    "Applied",
    "Failed",
    "BagEntry",
    "SyncReport",
    "convert_bags",
    # Aggregator
    "aggregator",
]
