"""Announce a created todo."""

from datetime import UTC, datetime

import structlog

from service_starter.services.todo.context import TodoPipelineContext

logger = structlog.get_logger(__name__)

NOTIFICATION_TYPE = "todo.created"


async def notify_creation(context: TodoPipelineContext) -> TodoPipelineContext:
    """
    Record a ``todo.created`` notification on the context.

    Delivery (email, webhook, queue producer) is left to whoever consumes
    ``results["notification_sent"]``. Skipped when no todo was created.
    """
    if context.todo is None:
        return context

    todo = context.todo
    context.results["notification_sent"] = {
        "type": NOTIFICATION_TYPE,
        "todo_id": str(todo.id),
        "user_id": todo.user_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }

    logger.info(
        "todo_notification_recorded",
        todo_id=str(todo.id),
        title=todo.title,
        request_id=context.request_id,
    )

    return context
