"""Fixtures for end-to-end tests against a migrated temp database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import repairshop.infrastructure.storage.sqlite.connection as conn_module
from repairshop.infrastructure.storage.sqlite.connection import close_pool
from repairshop.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
async def shop_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    db_path = tmp_path / "shop.db"
    await initialize_database(db_path, create_backup_before=False)

    mock_settings = MagicMock()
    mock_settings.storage.db_path = db_path
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        yield db_path
        await close_pool()
    conn_module._pool = None
