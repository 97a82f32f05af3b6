"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import Callable, Generator
from datetime import UTC, datetime

import pytest

# Keep settings away from the working directory and the network
os.environ.setdefault("STORAGE_DATA_DIR", tempfile.mkdtemp(prefix="repairshop-tests-"))
os.environ.pop("NOTIFY_WEBHOOK_URL", None)

from repairshop.application.services import reset_services  # noqa: E402
from repairshop.config import reset_settings  # noqa: E402
from repairshop.core.entities import (  # noqa: E402
    Budget,
    BudgetItem,
    ServiceOrder,
)
from repairshop.infrastructure.storage.sqlite import reset_stores  # noqa: E402

FIXED_NOW = datetime(2025, 3, 10, 14, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Drop cached settings, services and stores between tests."""
    yield
    reset_services()
    reset_stores()
    reset_settings()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock pinned to 2025-03-10 14:30 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_order() -> ServiceOrder:
    """A TV in for repair."""
    return ServiceOrder(
        id=1,
        os_number="OS-1002",
        client_id="CLI-9",
        client_name="Maria Souza",
        technician_name="Carlos",
        equipment_type="TV",
        equipment_brand="Samsung",
        equipment_model="U8100F",
        defect="Sem imagem",
        entry_date=FIXED_NOW,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def sample_budget() -> Budget:
    """Pending budget totalling R$ 500,00."""
    return Budget(
        id=1,
        os_number="OS-1002",
        client_name="Maria Souza",
        device="TV Samsung U8100F",
        items=[
            BudgetItem(description="BARRA LED 37", quantity=2, unit_price=150.0),
            BudgetItem(description="Mão de obra", quantity=1, unit_price=200.0),
        ],
        issue_date=FIXED_NOW.date(),
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )
