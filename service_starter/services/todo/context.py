"""Pipeline context for todo orchestrators."""

from dataclasses import dataclass, field

from service_starter.models.todo import CreateTodoInput, Todo
from service_starter.orchestrator.pipeline.context import OperationContext
from service_starter.repositories.todo_repository import TodoRepository


@dataclass(kw_only=True)
class TodoPipelineContext(OperationContext[CreateTodoInput]):
    """
    Context threaded through the todo creation stages.

    Attributes:
        repository: Storage handle shared with the caller's session
        todo: Set by the create stage
        validation_errors: Rule violations found by the validate stage
    """

    repository: TodoRepository
    todo: Todo | None = None
    validation_errors: list[str] = field(default_factory=list)
