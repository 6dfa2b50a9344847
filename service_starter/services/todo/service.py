"""
Todo Service.

Entry point used by the API layer. Writes go through the creation pipeline;
simple reads hit the repository directly.
"""

from typing import Any

from service_starter.models.todo import CreateTodoInput, Todo
from service_starter.observability.metrics import OrchestratorMetrics
from service_starter.orchestrator.pipeline.result import OrchestratorResult
from service_starter.repositories.todo_repository import TodoRepository
from service_starter.services.todo.orchestrator import DEFAULT_TIMEOUT_MS, CreateTodoOrchestrator


class TodoService:
    """
    Todo use cases.

    Example:
        >>> service = TodoService(TodoRepository(session))
        >>> result = await service.create_todo(CreateTodoInput(title="x", user_id="u1"))
        >>> if result.success:
        ...     print(result.data.id)
    """

    def __init__(
        self,
        repository: TodoRepository,
        *,
        pipeline_timeout_ms: float = DEFAULT_TIMEOUT_MS,
        metrics: OrchestratorMetrics | None = None,
    ) -> None:
        self._repository = repository
        self._orchestrator = CreateTodoOrchestrator(
            repository,
            timeout_ms=pipeline_timeout_ms,
            metrics=metrics,
        )

    async def create_todo(self, input: CreateTodoInput) -> OrchestratorResult[Todo]:
        """Create a todo through the validate -> create -> notify pipeline."""
        return await self._orchestrator.execute(input)

    async def list_todos(self, user_id: str) -> list[Todo]:
        """List a user's todos."""
        return await self._repository.list_for_user(user_id)

    @staticmethod
    async def health_check() -> dict[str, Any]:
        """Service liveness; does not touch storage."""
        return {"status": "healthy", "service": "TodoService"}
