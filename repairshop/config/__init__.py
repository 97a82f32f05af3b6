"""Configuration module."""

from repairshop.config.logging import configure_logging, get_logger, order_context
from repairshop.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "order_context",
]
