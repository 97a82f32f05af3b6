"""Tests for structlog configuration and shop log context."""

import pytest
import structlog

from repairshop.config import configure_logging, order_context
from repairshop.config.logging import shop_context
from repairshop.config.settings import Settings, ShopSettings


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_shop_context_stamps_identity():
    settings = Settings(environment="production", shop=ShopSettings(os_number_prefix="AT-"))
    event = shop_context(settings)(None, "info", {"event": "order_opened"})
    assert event["os_prefix"] == "AT-"
    assert event["environment"] == "production"
    assert event["app"] == settings.app_name


def test_shop_context_keeps_event_values():
    event = shop_context(Settings())(None, "info", {"event": "x", "app": "worker"})
    assert event["app"] == "worker"


def test_order_context_binds_and_unbinds():
    with order_context("OS-000007", order_id=7):
        bound = structlog.contextvars.get_contextvars()
        assert bound["os_number"] == "OS-000007"
        assert bound["order_id"] == 7
    assert "os_number" not in structlog.contextvars.get_contextvars()


@pytest.mark.usefixtures("restore_structlog")
@pytest.mark.parametrize(
    ("json_logs", "renderer"),
    [(True, structlog.processors.JSONRenderer), (False, structlog.dev.ConsoleRenderer)],
)
def test_configure_picks_renderer(json_logs, renderer):
    configure_logging(level="debug", json_logs=json_logs)
    assert isinstance(structlog.get_config()["processors"][-1], renderer)
