"""
Todo API Routes.

Endpoints:
----------
POST /api/v1/todos         - Create a todo through the creation pipeline
GET  /api/v1/todos         - List the caller's todos
GET  /api/v1/todos/health  - Todo service health
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from service_starter.api.dependencies import get_current_user_id, get_todo_service
from service_starter.models.todo import (
    CreateTodoInput,
    CreateTodoRequest,
    ExecutionMetadata,
    TodoListResponse,
    TodoResponse,
)
from service_starter.services.todo.service import TodoService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/todos", tags=["todos"])


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a todo",
    responses={400: {"description": "Pipeline failed (validation or stage failure)"}},
)
async def create_todo(
    body: CreateTodoRequest,
    user_id: str = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> Any:
    """
    Create a todo.

    Runs validate-input -> create-todo -> notify-creation and returns the
    created todo with the pipeline's total duration and per-stage timings.
    """
    result = await service.create_todo(
        CreateTodoInput(title=body.title, description=body.description, user_id=user_id)
    )

    if not result.success:
        logger.info(
            "todo_create_rejected",
            user_id=user_id,
            error=result.error_message,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": {
                    "message": result.error_message or "Failed to create todo",
                    "statusCode": status.HTTP_400_BAD_REQUEST,
                },
            },
        )

    return TodoResponse(
        data=result.data,
        metadata=ExecutionMetadata(duration=result.duration_ms, metrics=result.metrics),
    )


@router.get("", response_model=TodoListResponse, summary="List the caller's todos")
async def list_todos(
    user_id: str = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service),
) -> TodoListResponse:
    todos = await service.list_todos(user_id)
    return TodoListResponse(data=todos)


@router.get("/health", summary="Todo service health")
async def todo_service_health() -> dict[str, Any]:
    return await TodoService.health_check()
