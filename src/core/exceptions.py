"""
Domain exceptions for the stock ledger.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Movement quantity is not a positive integer."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Quantity must be a positive integer",
            value=quantity,
        )
        self.code = "INVALID_QUANTITY"


class InvalidBagConfigurationError(ValidationError):
    """Bag/container entry is missing or has invalid fields."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(field=field, message=message, value=value)
        self.code = "INVALID_BAG_CONFIGURATION"


# Lookup Exceptions
class ItemNotFoundError(StockLedgerError):
    """Inventory item not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


# Persistence Exceptions
class PersistenceError(StockLedgerError):
    """Base exception for storage backend operations."""

    def __init__(self, operation: str, error: str, code: str = "PERSISTENCE_ERROR"):
        super().__init__(
            f"Storage error during {operation}: {error}",
            code=code,
            details={"operation": operation, "error": error},
        )
        self.operation = operation


class StorageUnavailableError(PersistenceError):
    """Backend unreachable or timing out after all retries."""

    def __init__(self, operation: str, error: str, attempts: int = 1):
        super().__init__(operation, error, code="STORAGE_UNAVAILABLE")
        self.details["attempts"] = attempts


class StorageRejectedError(PersistenceError):
    """Backend refused the write; retrying will not help."""

    def __init__(self, operation: str, error: str, status_code: int | None = None):
        super().__init__(operation, error, code="STORAGE_REJECTED")
        self.details["status_code"] = status_code


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
