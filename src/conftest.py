import contextlib

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.attendees.features.submit_rsvp.rate_limiter import rsvp_rate_limiter
from src.main import app
from src.models.base import BaseModel

# Importing the ORM models registers their tables on the metadata
from src.attendees.repository import orm_models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rsvp_rate_limiter.reset()
    yield
    rsvp_rate_limiter.reset()


@pytest.fixture
async def db_session():
    """In-memory database built from the ORM metadata, one per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def client_factory():
    """Build an HTTP client for the app with dependency overrides applied."""

    @contextlib.asynccontextmanager
    async def _client_factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _client_factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac
