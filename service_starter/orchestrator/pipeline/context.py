"""
Pipeline Context and Builder.

Provides the mutable value threaded through every pipeline stage: the request
input, a results map for stage side products, accumulated errors, free-form
metadata and the performance tracker.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from uuid import uuid4

from service_starter.orchestrator.pipeline.tracker import PerformanceTracker

TInput = TypeVar("TInput")


def generate_request_id() -> str:
    """Generate an opaque correlation token for one execution."""
    return uuid4().hex


@dataclass(kw_only=True)
class OperationContext(Generic[TInput]):
    """
    Context for passing data between pipeline stages.

    Owned by exactly one ``execute`` call. Stages run sequentially, so only one
    stage touches the context at a time. Concrete orchestrators subclass this
    (as another keyword-only dataclass) to carry their own fields, e.g. a
    storage handle.

    Attributes:
        input: Request payload; stages must treat it as read-only
        request_id: Unique token used for log correlation
        start_time: Wall-clock creation time (seconds since epoch)
        perf_tracker: Per-execution stage duration recorder
        results: Side products written by stages (keys are stage-defined)
        errors: Errors accumulated by non-critical failures and validation
        metadata: Contextual tags (orchestrator name, input type, ...)
    """

    input: TInput
    request_id: str = field(default_factory=generate_request_id)
    start_time: float = field(default_factory=time.time)
    perf_tracker: PerformanceTracker | None = None
    results: dict[str, Any] = field(default_factory=dict)
    errors: list[Exception] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_error(self, error: Exception) -> None:
        """Record an error without interrupting the pipeline."""
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Check if any errors were recorded."""
        return len(self.errors) > 0

    def set_result(self, key: str, value: Any) -> None:
        """Store a side product for later stages or the result builder."""
        self.results[key] = value

    def get_result(self, key: str, default: Any = None) -> Any:
        """Retrieve a side product stored by an earlier stage."""
        return self.results.get(key, default)

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the context was created."""
        return (time.time() - self.start_time) * 1000


class OperationContextBuilder(Generic[TInput]):
    """
    Builder for creating OperationContext instances.

    Example:
        context = (
            OperationContextBuilder()
            .with_input(payload)
            .with_metadata("orchestrator", "CreateTodoOrchestrator")
            .build()
        )
    """

    def __init__(self) -> None:
        """Initialize builder with defaults."""
        self._input: Any = None
        self._request_id: str | None = None
        self._tracker: PerformanceTracker | None = None
        self._metadata: dict[str, Any] = {}
        self._results: dict[str, Any] = {}

    def with_input(self, input: TInput) -> OperationContextBuilder[TInput]:
        """Set request input."""
        self._input = input
        return self

    def with_request_id(self, request_id: str) -> OperationContextBuilder[TInput]:
        """Set request ID."""
        self._request_id = request_id
        return self

    def with_tracker(self, tracker: PerformanceTracker) -> OperationContextBuilder[TInput]:
        """Attach a caller-supplied performance tracker."""
        self._tracker = tracker
        return self

    def with_metadata(self, key: str, value: Any) -> OperationContextBuilder[TInput]:
        """Add a metadata tag."""
        self._metadata[key] = value
        return self

    def with_result(self, key: str, value: Any) -> OperationContextBuilder[TInput]:
        """Pre-seed a results entry."""
        self._results[key] = value
        return self

    def build(self) -> OperationContext[TInput]:
        """
        Build the OperationContext.

        Generates a request ID if not provided.

        Returns:
            Configured OperationContext instance
        """
        return OperationContext(
            input=self._input,
            request_id=self._request_id or generate_request_id(),
            perf_tracker=self._tracker,
            results=self._results.copy(),
            metadata=self._metadata.copy(),
        )
