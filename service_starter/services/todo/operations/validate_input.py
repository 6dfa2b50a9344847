"""Validate the todo creation input."""

import structlog

from service_starter.errors import ValidationError
from service_starter.models.todo import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH
from service_starter.services.todo.context import TodoPipelineContext

logger = structlog.get_logger(__name__)


async def validate_input(context: TodoPipelineContext) -> TodoPipelineContext:
    """
    Check the business rules for a new todo.

    Violations do not raise: they are collected into
    ``context.validation_errors`` plus one ValidationError in
    ``context.errors``, and later stages decide what to do with them.
    """
    errors: list[str] = []
    data = context.input

    if not data.title or not data.title.strip():
        errors.append("Title is required")
    elif len(data.title) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be less than {MAX_TITLE_LENGTH} characters")

    if data.description and len(data.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters")

    if not data.user_id:
        errors.append("User ID is required")

    if errors:
        context.validation_errors = errors
        context.errors.append(
            ValidationError(f"Validation failed: {', '.join(errors)}", details=errors)
        )
        logger.info(
            "todo_validation_failed",
            request_id=context.request_id,
            errors=errors,
        )

    return context
