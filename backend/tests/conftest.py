"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import Pool, StaticPool

from backend.app.main import app
from backend.app.db.session import get_db, Base

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)).lower():
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test, wired into the app's get_db."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    testing_session_local = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with testing_session_local() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield testing_session_local

    app.dependency_overrides = {}
    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_headers():
    return {"X-User-ID": USER_ID}


@pytest.fixture
def other_user_headers():
    return {"X-User-ID": OTHER_USER_ID}


@pytest.fixture
async def vehicle(client, user_headers):
    """Van with round default rates: 10 L/100km, 2 UAH/km, 150 UAH/day."""
    response = await client.post("/v1/vehicles", json={
        "name": "Sprinter",
        "type": "van",
        "default_fuel_consumption_l_per_100km": 10,
        "default_depreciation_uah_per_km": 2,
        "default_daily_taxes_uah": 150
    }, headers=user_headers)
    assert response.status_code == 201
    return response.json()
