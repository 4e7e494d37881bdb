"""Service test fixtures — async DB + FastAPI test client + fake email sender.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_email_client dependency overridden with FakeEmailSender (no network)
    - db_manager patched so the readiness check hits the test DB

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: every session shares the one in-memory connection, so rows
      committed through the app are visible to test_db
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from newsletter.db.base import Base
from newsletter.infrastructure.database import get_db, DatabaseSessionManager
from newsletter.infrastructure.email_client import get_email_client
from newsletter.infrastructure.password_hashing import hash_password
from newsletter.models.user import User
import newsletter.infrastructure.database as db_module
from newsletter.main import app

from tests.services.factories import TEST_PASSWORD, TEST_USERNAME
from tests.services.mock_email import FakeEmailSender


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def email_sender():
    return FakeEmailSender()


@pytest.fixture
async def client(test_engine, test_session_factory, email_sender):
    """FastAPI test client with DB and email dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_client] = lambda: email_sender

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_user(test_db):
    """Insert a publisher account with a real argon2id hash."""
    user = User(
        user_id=uuid.uuid4(),
        username=TEST_USERNAME,
        password_hash=hash_password(TEST_PASSWORD),
    )
    test_db.add(user)
    await test_db.commit()
    return user
