"""Todo service: example of a concrete orchestrator."""

from service_starter.services.todo.context import TodoPipelineContext
from service_starter.services.todo.orchestrator import CreateTodoOrchestrator
from service_starter.services.todo.service import TodoService

__all__ = ["CreateTodoOrchestrator", "TodoPipelineContext", "TodoService"]
