"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from service_starter import __version__, database
from service_starter.api.middleware import HttpMetricsMiddleware
from service_starter.api.routes import health, metrics, todos
from service_starter.config import settings
from service_starter.errors import AppError, format_error_response
from service_starter.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and, outside production, create the schema.
    """
    configure_logging(settings.log_level, json_logs=settings.is_production)

    if not settings.is_production and database.engine is not None:
        try:
            await database.init_db()
        except Exception as e:
            # The readiness probe reports the database as down
            logger.warning("database_init_failed", error=str(e))

    logger.info("service_started", environment=settings.environment, version=__version__)
    yield
    logger.info("service_stopping")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render operational errors in the standard error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error_response(exc, path=request.url.path),
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Service Starter API",
        description="Web service starter with pipeline-based orchestration",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(HttpMetricsMiddleware)

    app.add_exception_handler(AppError, app_error_handler)

    app.include_router(health.router)
    app.include_router(todos.router)
    if settings.metrics_enabled:
        app.include_router(metrics.router)

    return app


app = create_app()
