"""Infrastructure layer implementations."""

from repairshop.infrastructure import notifications, storage

__all__ = ["storage", "notifications"]
