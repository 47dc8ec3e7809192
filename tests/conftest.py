"""
Shared test fixtures for the Floorboard test suite.

Async throughout (aiosqlite + AsyncSession), one in-memory database per test.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["RATE_LIMIT_ENABLED"] = "false"

from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from floorboard.api.v1.deps import get_current_active_user, get_db
from floorboard.db.base import Base
from floorboard.db.session import _enable_sqlite_foreign_keys
from floorboard.main import app
from floorboard.models.user import User

# Separate test engine; the app's own engine is never touched
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(test_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

TestingSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before usage and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


# ── Auth Overrides ──────────────────────────────────────────────────
async def _override_get_current_active_user():
    return User(id=1, username="tester", is_active=True)


app.dependency_overrides[get_current_active_user] = _override_get_current_active_user


@pytest.fixture
def real_auth():
    """Disable the session override so requests go through JWT decoding."""
    app.dependency_overrides.pop(get_current_active_user, None)
    yield
    app.dependency_overrides[get_current_active_user] = _override_get_current_active_user


# ── Factories ───────────────────────────────────────────────────────
@pytest.fixture
def make_employee(async_client: AsyncClient):
    async def _make(employee_number: str, name: str | None = None, **extra) -> dict:
        resp = await async_client.post(
            "/api/v1/employees",
            json={"employee_number": employee_number, "name": name or f"Emp {employee_number}", **extra},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_workplace(async_client: AsyncClient):
    async def _make(number: int, name: str | None = None, **extra) -> dict:
        resp = await async_client.post(
            "/api/v1/workplaces",
            json={"number": number, "name": name or f"Line {number}", **extra},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
