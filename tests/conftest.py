"""Shared fixtures: a seeded SQLite store per test and an ASGI client."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from aqar_backend.config import Settings
from aqar_backend.main import create_app
from aqar_backend.services import AppServices


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        seed_on_startup=True,
        reset_interval_seconds=0,
        log_format="text",
    )


@pytest_asyncio.fixture
async def services(test_settings) -> AsyncIterator[AppServices]:
    # ASGITransport does not run the lifespan, so the services are started here
    services = AppServices(test_settings)
    await services.start()
    yield services
    await services.stop()


@pytest_asyncio.fixture
async def client(test_settings, services) -> AsyncIterator[AsyncClient]:
    app = create_app(test_settings)
    app.state.services = services
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def load_data(client):
    """Fetch the bulk load and assert it succeeded."""

    async def _load() -> dict:
        response = await client.get("/api/load-data")
        assert response.status_code == 200
        return response.json()

    return _load
