"""Pytest configuration and fixtures for API tests."""

import os
from collections.abc import AsyncGenerator
from contextlib import contextmanager
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from city_info_api.database import Base, get_db
from city_info_api.dependencies import get_mail_service
from city_info_api.mail import MailService
from city_info_api.main import app
from city_info_api.seed import ensure_seed_data
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Use SQLite for local tests, PostgreSQL in CI (when TEST_DATABASE_URL is set)
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

is_sqlite = TEST_DATABASE_URL.startswith("sqlite")


class RecordingMailService(MailService):
    """Keeps sent mails in memory."""

    def __init__(self):
        super().__init__("admin@test.local", "noreply@test.local")
        self.sent: list[tuple[str, str]] = []

    def send(self, subject: str, message: str) -> None:
        self.sent.append((subject, message))


def _create_test_engine():
    if is_sqlite:
        # SQLite in-memory requires StaticPool to keep connection alive
        engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # SQLite only cascades deletes with foreign keys switched on
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    # PostgreSQL settings - use NullPool to avoid event loop issues
    return create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh database with the demo cities for every test."""
    engine = _create_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await ensure_seed_data(session)

    yield factory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def _override_get_db(factory: async_sessionmaker[AsyncSession]):
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        """Override database dependency for tests."""
        async with factory() as session:
            yield session

    return override_get_db


@pytest.fixture
def mail_service() -> RecordingMailService:
    """Mail sender that records instead of sending."""
    return RecordingMailService()


@pytest_asyncio.fixture
async def client(session_factory, mail_service) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for FastAPI app."""
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    app.dependency_overrides[get_mail_service] = lambda: mail_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def failing_commits(client, session_factory):
    """Context manager under which every commit made by the app fails."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            session.commit = AsyncMock(
                side_effect=OperationalError("COMMIT", None, Exception("database is locked"))
            )
            yield session

    @contextmanager
    def _failing():
        previous = app.dependency_overrides[get_db]
        app.dependency_overrides[get_db] = override_get_db
        try:
            yield
        finally:
            app.dependency_overrides[get_db] = previous

    return _failing
