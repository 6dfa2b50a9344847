"""
Todo Models.

Data Models:
------------
- Todo: Persisted todo item
- CreateTodoInput: Input of the todo creation pipeline
- CreateTodoRequest: Body of POST /api/v1/todos
- TodoResponse / TodoListResponse / ExecutionMetadata: API responses
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000


class Todo(BaseModel):
    """Persisted todo item."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    completed: bool = False
    user_id: str
    created_at: datetime
    updated_at: datetime


class CreateTodoInput(BaseModel):
    """
    Input of the todo creation pipeline.

    Unconstrained; the validate-input stage checks the business rules and
    reports every violation at once.
    """

    title: str = ""
    description: str | None = None
    user_id: str = ""


class CreateTodoRequest(BaseModel):
    """Request body for POST /api/v1/todos."""

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Todo title")
    description: str = Field(
        default="", max_length=MAX_DESCRIPTION_LENGTH, description="Todo description"
    )


class ExecutionMetadata(BaseModel):
    """Pipeline timing returned alongside a created resource."""

    duration: float = Field(..., description="Total execution time in ms")
    metrics: dict[str, float] = Field(default_factory=dict, description="Per-stage timing")


class TodoResponse(BaseModel):
    """Successful response for POST /api/v1/todos."""

    success: bool = True
    data: Todo
    metadata: ExecutionMetadata | None = None


class TodoListResponse(BaseModel):
    """Response for GET /api/v1/todos."""

    success: bool = True
    data: list[Todo]
