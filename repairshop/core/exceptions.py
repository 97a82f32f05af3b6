"""
Domain exceptions for the repair shop engine.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class RepairShopError(Exception):
    """Base exception for all engine errors."""

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
class ValidationError(RepairShopError):
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


class BudgetNotEditableError(ValidationError):
    """Budget already left the pending state."""

    def __init__(self, budget_id: int, status: str):
        super().__init__(
            field="status",
            message=f"Budget {budget_id} is {status} and can no longer change",
            value=status,
        )
        self.code = "BUDGET_NOT_EDITABLE"
        self.details.update({"budget_id": budget_id})


class InvalidAdjustmentError(RepairShopError):
    """Stock adjustment target is not acceptable."""

    def __init__(self, part_id: str, target_quantity: int):
        super().__init__(
            f"Cannot adjust stock of '{part_id}' to {target_quantity}: target must be >= 0",
            code="INVALID_ADJUSTMENT",
            details={"part_id": part_id, "target_quantity": target_quantity},
        )


class InvalidInputError(RepairShopError):
    """Malformed input value (dates, durations)."""

    def __init__(self, field: str, value: Any, reason: str = "malformed value"):
        super().__init__(
            f"Invalid {field}: {reason}",
            code="INVALID_INPUT",
            details={"field": field, "value": str(value)[:100], "reason": reason},
        )


# Lookup Exceptions
class NotFoundError(RepairShopError):
    """Requested record does not exist."""

    def __init__(self, entity: str, key: Any):
        super().__init__(
            f"{entity.capitalize()} not found: {key}",
            code=f"{entity.upper()}_NOT_FOUND",
            details={f"{entity}_id": key},
        )


class MovementNotFoundError(NotFoundError):
    """Stock movement not found."""

    def __init__(self, movement_id: int):
        super().__init__("movement", movement_id)


class OrderNotFoundError(NotFoundError):
    """Service order not found."""

    def __init__(self, order_key: int | str):
        super().__init__("order", order_key)


class BudgetNotFoundError(NotFoundError):
    """Budget not found."""

    def __init__(self, budget_id: int):
        super().__init__("budget", budget_id)


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found."""

    def __init__(self, invoice_id: int):
        super().__init__("invoice", invoice_id)


class PartNotFoundError(NotFoundError):
    """Part catalog entry not found."""

    def __init__(self, part_id: str):
        super().__init__("part", part_id)


# Storage Exceptions
class StorageError(RepairShopError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Collaborator Exceptions
class NotificationError(RepairShopError):
    """Client notification could not be delivered."""

    def __init__(self, channel: str, reason: str):
        super().__init__(
            f"Notification via {channel} failed: {reason}",
            code="NOTIFICATION_FAILED",
            details={"channel": channel, "reason": reason},
        )


class ConfigurationError(RepairShopError):
    """Configuration error."""

    pass
