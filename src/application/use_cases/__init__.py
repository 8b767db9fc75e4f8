"""Application use cases."""

from src.application.use_cases.build_reports import BuildReportsUseCase
from src.application.use_cases.manage_items import ItemCatalogUseCase
from src.application.use_cases.record_movement import RecordMovementUseCase

__all__ = [
    "RecordMovementUseCase",
    "ItemCatalogUseCase",
    "BuildReportsUseCase",
]
