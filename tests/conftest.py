# tests/conftest.py
import os
from typing import AsyncGenerator

# No rotating log file during test runs
os.environ.setdefault("LOG_FILE", "")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from app.core.config import settings
from app.db import mongodb
from app.models.supplier import SUPPLIER_RESOURCE
from app.services.resource_service import ResourceService
from main import app

TEST_API_KEY = "test-key"


# --- Database fixtures ---
@pytest_asyncio.fixture(scope="function")
async def mongo_db(monkeypatch):
    """
    Swap the module-level Motor client for an in-memory one and build the
    same indexes the app creates at startup. Every test gets a fresh database.
    """
    mock_client = AsyncMongoMockClient()
    database = mock_client[settings.MONGO_DB]
    monkeypatch.setattr(mongodb, "client", mock_client)
    monkeypatch.setattr(mongodb, "db", database)
    await mongodb.ensure_indexes(database)
    yield database


@pytest.fixture(autouse=True)
def api_keys(monkeypatch):
    monkeypatch.setattr(settings, "API_KEYS", [TEST_API_KEY])


# --- HTTP clients ---
@pytest_asyncio.fixture(scope="function")
async def client(mongo_db) -> AsyncGenerator[AsyncClient, None]:
    """Client sending a valid X-API-Key."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-API-Key": TEST_API_KEY},
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def anonymous_client(mongo_db) -> AsyncGenerator[AsyncClient, None]:
    """Client without credentials."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# --- Domain fixtures ---
@pytest.fixture
def supplier_service(mongo_db) -> ResourceService:
    return ResourceService(SUPPLIER_RESOURCE)


@pytest.fixture
def create_supplier(client: AsyncClient):
    """Factory: POST a supplier and return the response's data block."""
    async def _create(**overrides):
        payload = {
            "name": "Acme",
            "contact": {"phone": "1234567890"},
            "address": {"street": "1 Main St", "city": "Springfield", "state": "IL", "country": "USA"},
        }
        payload.update(overrides)
        response = await client.post("/api/suppliers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create
