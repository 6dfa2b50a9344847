"""
Pipeline Stage Declaration.

A stage is one named unit of work: an async operation that takes the context
and returns it (possibly mutated), a critical flag and an optional timeout.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

TContext = TypeVar("TContext")

# Operations always return the same context shape they receive
StageOperation = Callable[[TContext], Awaitable[TContext]]


@dataclass(frozen=True)
class PipelineStage(Generic[TContext]):
    """
    Static declaration of one pipeline stage.

    Attributes:
        name: Display name, metrics label and tracker key
        operation: Async function context -> context
        critical: Abort the pipeline when this stage fails (default: True)
        timeout_ms: Stage-specific timeout; None or 0 means no stage timeout
    """

    name: str
    operation: StageOperation
    critical: bool = True
    timeout_ms: float | None = None

    @property
    def has_timeout(self) -> bool:
        """Whether the stage is raced against its own timeout."""
        return bool(self.timeout_ms) and self.timeout_ms > 0


def validate_pipeline(stages: Sequence[PipelineStage]) -> None:
    """
    Check a stage list before running it.

    Stage names double as tracker keys and metrics labels, so they must be
    unique within one pipeline.

    Raises:
        ValueError: If two stages share a name
    """
    seen: set[str] = set()
    for stage in stages:
        if stage.name in seen:
            raise ValueError(f"Duplicate stage name in pipeline: '{stage.name}'")
        seen.add(stage.name)
