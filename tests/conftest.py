"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from textsummarizer.config import Settings
from textsummarizer.infrastructure.database import get_session
from textsummarizer.infrastructure.models import Base
from textsummarizer.main import create_app
from textsummarizer.services.summarizer import SummarizationBackend

# Test database URL (in-memory SQLite shared through a single connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class StubBackend(SummarizationBackend):
    """Deterministic summarization backend recording its calls."""

    def __init__(self, reply: str = "  A faithful summary.\n", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def summarize(self, text: str, instructions: str) -> str:
        self.calls.append((text, instructions))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def stub_backend() -> StubBackend:
    """Summarization backend that never leaves the process."""
    return StubBackend()


@pytest.fixture
def test_settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None, openai_api_key="")


@pytest.fixture
def app(test_engine, stub_backend, test_settings) -> FastAPI:
    """Application wired to the test database and stub backend."""
    application = create_app(settings=test_settings, backend=stub_backend)
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_session] = override_get_session
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
