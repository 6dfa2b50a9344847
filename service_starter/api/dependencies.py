"""
FastAPI dependencies shared by the routes.
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from service_starter.config import settings
from service_starter.database import get_db
from service_starter.errors import UnauthorizedError
from service_starter.repositories.todo_repository import TodoRepository
from service_starter.services.todo.service import TodoService


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """
    Identity of the caller.

    Token issuance and verification belong to the authentication layer in
    front of this service, which forwards the verified user id in the
    X-User-Id header.

    Raises:
        UnauthorizedError: If the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError("Missing X-User-Id header")
    return x_user_id.strip()


async def get_todo_service(session: AsyncSession = Depends(get_db)) -> TodoService:
    """TodoService bound to the request's database session."""
    return TodoService(
        TodoRepository(session),
        pipeline_timeout_ms=settings.todo_pipeline_timeout_ms,
    )
