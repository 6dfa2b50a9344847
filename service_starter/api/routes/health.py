"""
Health and readiness endpoints.

GET /health - liveness
GET /ready  - readiness (database reachable), 503 when not ready
"""

import time
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from service_starter import database
from service_starter.config import settings

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


async def get_probe_session() -> AsyncGenerator[AsyncSession | None, None]:
    """Session for the readiness probe; None when no engine is configured."""
    if database.async_session_maker is None:
        yield None
        return
    async with database.async_session_maker() as session:
        yield session


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness endpoint for Docker and monitoring."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(
    session: AsyncSession | None = Depends(get_probe_session),
) -> JSONResponse:
    """Readiness endpoint: checks the database connection."""
    database_ready = False

    if session is not None:
        try:
            database_ready = await database.ping(session)
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))

    return JSONResponse(
        status_code=200 if database_ready else 503,
        content={
            "status": "ready" if database_ready else "not_ready",
            "services": {"database": database_ready},
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
