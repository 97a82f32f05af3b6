"""Fixtures for API tests: the app with use cases swapped for mocks."""

from collections.abc import AsyncGenerator, Callable, Generator

import pytest
from httpx import ASGITransport, AsyncClient

from repairshop.api.main import app


@pytest.fixture
def override() -> Generator[Callable, None, None]:
    """Register a dependency override for the duration of one test."""
    registered = []

    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value
        registered.append(dependency)
        return value

    yield _override
    for dependency in registered:
        app.dependency_overrides.pop(dependency, None)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
