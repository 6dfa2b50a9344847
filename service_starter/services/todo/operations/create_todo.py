"""Persist the todo."""

from service_starter.services.todo.context import TodoPipelineContext


async def create_todo(context: TodoPipelineContext) -> TodoPipelineContext:
    """
    Insert the todo through the repository.

    Skipped when validation found problems. Storage errors propagate so the
    orchestrator reports them against this stage.
    """
    if context.validation_errors:
        return context

    data = context.input
    todo = await context.repository.create(
        title=data.title,
        description=data.description or None,
        user_id=data.user_id,
    )

    context.todo = todo
    context.results["created_todo"] = todo

    return context
