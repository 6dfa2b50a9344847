"""
Create Todo Orchestrator.

Pipeline: validate-input -> create-todo -> notify-creation
"""

from service_starter.errors import ValidationError
from service_starter.models.todo import CreateTodoInput, Todo
from service_starter.observability.metrics import OrchestratorMetrics
from service_starter.orchestrator.base import BaseOrchestrator
from service_starter.orchestrator.config import OrchestratorConfig
from service_starter.orchestrator.pipeline.stage import PipelineStage
from service_starter.repositories.todo_repository import TodoRepository
from service_starter.services.todo.context import TodoPipelineContext
from service_starter.services.todo.operations import (
    create_todo,
    notify_creation,
    validate_input,
)

ORCHESTRATOR_NAME = "CreateTodoOrchestrator"
DEFAULT_TIMEOUT_MS = 5000


class CreateTodoOrchestrator(BaseOrchestrator[TodoPipelineContext, Todo, CreateTodoInput]):
    """
    Creates a todo through the pipeline.

    Validation problems are reported through the context, not by raising, so
    ``build_result`` turns them into the failure.
    """

    def __init__(
        self,
        repository: TodoRepository,
        *,
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        metrics: OrchestratorMetrics | None = None,
    ) -> None:
        super().__init__(
            OrchestratorConfig(
                name=ORCHESTRATOR_NAME,
                timeout_ms=timeout_ms,
                enable_metrics=True,
                log_errors=True,
            ),
            metrics=metrics,
        )
        self._repository = repository

    async def initialize_context(self, input: CreateTodoInput) -> TodoPipelineContext:
        return TodoPipelineContext(
            input=input,
            repository=self._repository,
            metadata={
                "orchestrator": self.get_name(),
                "input_type": type(input).__name__,
            },
        )

    def get_pipeline(self) -> list[PipelineStage[TodoPipelineContext]]:
        return [
            PipelineStage("validate-input", validate_input, critical=True, timeout_ms=1000),
            PipelineStage("create-todo", create_todo, critical=True, timeout_ms=2000),
            # A lost notification must not fail an already persisted todo
            PipelineStage("notify-creation", notify_creation, critical=False, timeout_ms=1000),
        ]

    def build_result(self, context: TodoPipelineContext) -> Todo:
        if context.validation_errors:
            raise ValidationError(
                f"Validation failed: {', '.join(context.validation_errors)}",
                details=context.validation_errors,
            )
        if context.todo is None:
            raise RuntimeError("Todo creation failed - no todo in context")
        return context.todo
