"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - dependency_overrides cleared after each test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.user import User
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def valid_payload():
    return {
        "email": "a@b.com",
        "name": "Ann",
        "age": 30,
        "sex": "female",
        "birthday": "1990-01-01",
        "phone": "+1 (555) 123-4567",
    }


@pytest.fixture
async def seed_user(test_db):
    """Insert one user directly into the test DB."""
    from datetime import date, datetime, timezone

    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    user = User(
        email="seed@example.com", name="Сергей", age=41, sex="male",
        birthday=date(1983, 5, 17), phone="+7 (912) 345-6789",
        created_at=now, updated_at=now,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user
