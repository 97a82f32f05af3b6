"""
Service factory functions for dependency injection.

Wires infrastructure collaborators and configured core services.
Use cases import from here instead of building them directly.
"""

from typing import TYPE_CHECKING

from repairshop.config import get_settings
from repairshop.core.services.order_state_machine import ServiceOrderStateMachine

if TYPE_CHECKING:
    from repairshop.core.interfaces import INavigator, INotifier


# Singleton service instances
_state_machine: ServiceOrderStateMachine | None = None
_notifier: "INotifier | None" = None
_navigator: "INavigator | None" = None


def get_state_machine() -> ServiceOrderStateMachine:
    """Get or create the order state machine using shop settings."""
    global _state_machine
    if _state_machine is None:
        shop = get_settings().shop
        _state_machine = ServiceOrderStateMachine(
            default_warranty_months=shop.default_warranty_months
        )
    return _state_machine


def get_notifier() -> "INotifier":
    """
    Get or create the client notifier.

    Uses the webhook notifier; it is a no-op when no URL is configured.
    """
    global _notifier
    if _notifier is None:
        # Lazy import infrastructure to avoid circular imports
        from repairshop.infrastructure.notifications import WebhookNotifier

        settings = get_settings().notifications
        _notifier = WebhookNotifier(
            webhook_url=settings.webhook_url,
            timeout=settings.timeout,
        )
    return _notifier


def get_navigator() -> "INavigator":
    """Get or create the navigator."""
    global _navigator
    if _navigator is None:
        from repairshop.infrastructure.notifications import LoggingNavigator

        _navigator = LoggingNavigator()
    return _navigator


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _state_machine, _notifier, _navigator
    _state_machine = None
    _notifier = None
    _navigator = None
