"""Wall-clock helpers shared by entities and services."""

from collections.abc import Callable
from datetime import UTC, date, datetime

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(UTC)


def today(clock: Clock = utcnow) -> date:
    return clock().date()
