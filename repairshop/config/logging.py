"""
Structured logging configuration using structlog.

Console output while developing, JSON lines everywhere else. Every event
carries the shop identity (app, version, environment, O.S prefix) so logs
from several shop instances can share a sink. Work on a single order can
bind its O.S number with `order_context`.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from repairshop.config.settings import Settings, get_settings

# Chatty at DEBUG: one line per statement / request
QUIET_LOGGERS = ("aiosqlite", "httpx", "httpcore", "uvicorn.access")


def shop_context(settings: Settings) -> Processor:
    """Processor stamping the shop identity, resolved once at configure time."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "os_prefix": settings.shop.os_number_prefix,
    }

    def add_shop_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_shop_context


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Overrides settings.log_level
        json_logs: Force JSON (True) or console (False) rendering; by
            default only the development environment renders to console
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.environment != "development"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        shop_context(settings),
    ]

    if json_logs:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def order_context(os_number: str, **extra: Any) -> Iterator[None]:
    """Bind an order's O.S number to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(os_number=os_number, **extra):
        yield


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
