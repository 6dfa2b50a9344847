"""Stage operations of the todo creation pipeline."""

from service_starter.services.todo.operations.create_todo import create_todo
from service_starter.services.todo.operations.notify_creation import notify_creation
from service_starter.services.todo.operations.validate_input import validate_input

__all__ = ["create_todo", "notify_creation", "validate_input"]
