"""
Database connection and session management.

SQLAlchemy async engine, session factory and declarative base. The storage
layer is a collaborator of the orchestration core: repositories built on
these sessions are handed to pipeline stages through their context.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from service_starter.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for ORM models
Base = declarative_base()


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the async SQLAlchemy engine.

    Args:
        database_url: Override for ``settings.database_url``

    Returns:
        AsyncEngine: Configured async database engine
    """
    engine = create_async_engine(
        database_url or settings.database_url,
        echo=settings.db_echo,
        pool_pre_ping=True,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def receive_connect(dbapi_conn: Any, connection_record: Any) -> None:
        """Log successful database connections."""
        logger.debug("Database connection established")

    return engine


# Global engine instance
# Creation is deferred to test fixtures when the configured driver is unavailable
try:
    engine: AsyncEngine | None = create_engine()
except Exception as e:
    logger.warning(f"Failed to create database engine at module load time: {e}")
    engine = None

async_session_maker = (
    async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    if engine
    else None
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session, closed after the request
    """
    if async_session_maker is None:
        raise RuntimeError(
            "Database not initialized. Please ensure DATABASE_URL is configured correctly."
        )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(target: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in the ORM models.

    Schema migrations are out of scope; this is the development/test setup.
    """
    import service_starter.orm.models  # noqa: F401  (registers tables on Base)

    target = target or engine
    if target is None:
        raise RuntimeError("Database engine not initialized")

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized")


async def ping(session: AsyncSession) -> bool:
    """Run a trivial query; True when the database answers."""
    await session.execute(text("SELECT 1"))
    return True
