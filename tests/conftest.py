"""Shared test fixtures for qanda."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import pytest
from fastapi.testclient import TestClient

from qanda.api.app import create_app
from qanda.config.schema import DatabaseConfig, QandaConfig
from qanda.store.database import create_db

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
async def db_session() -> AsyncSession:  # type: ignore[misc]
    """In-memory SQLite async session with the schema created."""
    factory, engine = await create_db(DatabaseConfig(url="sqlite+aiosqlite://"))
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_config() -> Any:
    """Factory fixture for an in-memory QandaConfig."""

    def _make(**overrides: Any) -> QandaConfig:
        config = QandaConfig()
        config.database.url = "sqlite+aiosqlite:///:memory:"
        for section, values in overrides.items():
            for key, value in values.items():
                setattr(getattr(config, section), key, value)
        return config

    return _make


@pytest.fixture
def client(make_config: Any) -> Iterator[TestClient]:
    """TestClient over a full app with a fresh in-memory store."""
    app = create_app(make_config())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_question(client: TestClient) -> Any:
    """Factory fixture: POST a question and return its formatted data."""

    def _make(**fields: str) -> dict[str, Any]:
        body = {
            "title": "Question Title",
            "description": "Question description",
            "category": "general",
        }
        body.update(fields)
        resp = client.post("/questions", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make
