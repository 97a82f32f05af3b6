"""Outbound collaborators: client notifications and navigation."""

from repairshop.infrastructure.notifications.navigator import LoggingNavigator
from repairshop.infrastructure.notifications.webhook import WebhookNotifier

__all__ = ["WebhookNotifier", "LoggingNavigator"]
