"""
Pytest configuration and fixtures.

Provides fresh metrics registries, an in-memory SQLite database and an HTTP
test client bound to it.
"""

import os

# Must be set before service_starter.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from prometheus_client import CollectorRegistry  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import service_starter.orm.models  # noqa: E402,F401
from service_starter.api.main import app  # noqa: E402
from service_starter.database import Base, get_db  # noqa: E402
from service_starter.observability.metrics import OrchestratorMetrics  # noqa: E402

# =============================
# Metrics Fixtures
# =============================


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    """Isolated Prometheus registry for one test."""
    return CollectorRegistry()


@pytest.fixture
def orchestrator_metrics(metrics_registry: CollectorRegistry) -> OrchestratorMetrics:
    """Orchestrator metrics sink bound to the test's own registry."""
    return OrchestratorMetrics(metrics_registry)


# =============================
# Database Fixtures
# =============================


@pytest_asyncio.fixture
async def db_engine():
    """
    Create test database engine.

    In-memory SQLite shared through a single connection.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide async HTTP client for API testing.

    Overrides the database dependency to use the test database.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
