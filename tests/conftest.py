"""Pytest configuration and fixtures.

This module provides fixtures for:
- An isolated SQLite database for the app under test
- A bare AsyncSession for store-level tests
- An HTTP client that keeps cookies and does not follow redirects
"""

import os
import tempfile
import uuid
from pathlib import Path

import pytest

# Must be set before app modules read settings
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="todo-app-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DATA_DIR / 'app.db'}"
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402


def unique_username(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def db(anyio_backend, tmp_path: Path):
    """Fresh schema per test, separate from the app's database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def client():
    """Runs the app lifespan; cookies persist across requests."""
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def register(client: TestClient):
    """Register (and thereby log in) a user through the web form."""

    def _register(username: str | None = None, password: str = "secret1"):
        username = username or unique_username()
        response = client.post("/register", data={"username": username, "password": password})
        assert response.status_code == 303, response.text
        return username

    return _register
