"""
Orchestrator Result Model.

Typed outcome of one ``execute`` call.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class OrchestratorResult(Generic[T]):
    """
    Result of a full pipeline execution.

    Exactly one of ``data`` / ``error`` is meaningful, depending on ``success``.

    Attributes:
        success: Whether the pipeline and result building completed
        data: Result payload built from the final context
        error: Terminal cause of a failed execution
        duration_ms: Wall-clock milliseconds from call start to resolution
        metrics: Stage name -> duration map (partial on failure)
    """

    success: bool
    data: T | None = None
    error: Exception | None = None
    duration_ms: float = 0.0
    metrics: dict[str, float] = field(default_factory=dict)

    @property
    def is_failure(self) -> bool:
        return not self.success

    @property
    def error_message(self) -> str | None:
        """String form of the error, if any."""
        return str(self.error) if self.error is not None else None

    def unwrap(self) -> T:
        """
        Return the data of a successful result.

        Raises:
            Exception: The stored error when the result is a failure
        """
        if not self.success:
            raise self.error or RuntimeError("Orchestration failed without an error")
        return self.data  # type: ignore[return-value]

    @classmethod
    def ok(
        cls, data: T, duration_ms: float = 0.0, metrics: dict[str, float] | None = None
    ) -> "OrchestratorResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, duration_ms=duration_ms, metrics=metrics or {})

    @classmethod
    def fail(
        cls,
        error: Exception,
        duration_ms: float = 0.0,
        metrics: dict[str, float] | None = None,
    ) -> "OrchestratorResult[T]":
        """Create a failed result."""
        return cls(success=False, error=error, duration_ms=duration_ms, metrics=metrics or {})
