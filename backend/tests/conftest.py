"""Root conftest — shared settings, app and in-process HTTP client.

Invariants:
    - Settings come from the repo's configuration/ directory in the local environment
    - The database pool never connects: nothing in these tests opens a Postgres connection
    - client does not run the lifespan (ASGITransport); lifespan tests use TestClient
"""

import os
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

CONFIGURATION_DIR = Path(__file__).resolve().parents[2] / "configuration"

os.environ["APP_ENVIRONMENT"] = "local"
os.environ["APP_CONFIGURATION_DIRECTORY"] = str(CONFIGURATION_DIR)

from newsletter.config import Settings  # noqa: E402
from newsletter.main import create_app  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(database={"connect_on_startup": False})


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
