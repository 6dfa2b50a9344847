"""
Base Orchestrator.

Runs a named, ordered list of async stages over a shared context with
per-stage and whole-pipeline timeouts, critical vs non-critical failure
handling, and latency/error metrics.

Timeouts are cooperative. When a timeout wins its race the orchestrator stops
waiting and reports a failure, but the timed-out work is NOT cancelled: it
keeps running in the background and any side effects it performs later (a
database write, further context mutation, or, after a pipeline timeout, the
remaining stages) are not retracted. Late outcomes are logged as
``orphaned_operation_finished`` and never change the returned result.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

import structlog
from structlog.typing import BindableLogger

from service_starter.observability.metrics import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    UNKNOWN_STAGE,
    OrchestratorMetrics,
    get_orchestrator_metrics,
)
from service_starter.orchestrator.config import OrchestratorConfig
from service_starter.orchestrator.errors import (
    CriticalStageError,
    PipelineTimeoutError,
    StageTimeoutError,
)
from service_starter.orchestrator.pipeline.context import OperationContext
from service_starter.orchestrator.pipeline.interceptor import (
    error_key,
    record_duration,
    wrap_operation,
)
from service_starter.orchestrator.pipeline.result import OrchestratorResult
from service_starter.orchestrator.pipeline.stage import PipelineStage, validate_pipeline
from service_starter.orchestrator.pipeline.tracker import (
    DefaultPerformanceTracker,
    NullPerformanceTracker,
)

logger = structlog.get_logger(__name__)

TContext = TypeVar("TContext", bound=OperationContext)
TResult = TypeVar("TResult")
TInput = TypeVar("TInput")
T = TypeVar("T")

# Strong references to timed-out work still running in the background
_orphaned_tasks: set[asyncio.Task] = set()


def orphaned_task_count() -> int:
    """Number of timed-out operations that are still running."""
    return len(_orphaned_tasks)


def as_structured_logger(error_log: BindableLogger | logging.Logger | None) -> BindableLogger:
    """
    Normalize an injected failure log to one accepting structlog-style fields.

    None gives this module's logger; a stdlib logger is wrapped with a
    key/value renderer; anything else is used as is.
    """
    if error_log is None:
        return logger
    if isinstance(error_log, logging.Logger):
        return structlog.wrap_logger(
            error_log,
            processors=[structlog.processors.KeyValueRenderer(key_order=["event"])],
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    return error_log


class BaseOrchestrator(ABC, Generic[TContext, TResult, TInput]):
    """
    Abstract base class for orchestrators.

    Subclasses implement three hooks:
    - initialize_context(): build the per-execution context from the input
    - get_pipeline(): the fixed, ordered stage list
    - build_result(): convert the final context into the result payload

    The instance holds no per-execution state, so concurrent ``execute`` calls
    on one instance are safe as long as each call owns its context.

    Example:
        >>> class EchoOrchestrator(BaseOrchestrator[OperationContext, str, str]):
        ...     async def initialize_context(self, input: str) -> OperationContext:
        ...         return OperationContext(input=input)
        ...
        ...     def get_pipeline(self) -> list[PipelineStage]:
        ...         return [PipelineStage("echo", echo)]
        ...
        ...     def build_result(self, context: OperationContext) -> str:
        ...         return context.results["echo"]
        >>> result = await EchoOrchestrator(OrchestratorConfig(name="echo")).execute("hi")
    """

    def __init__(
        self,
        config: OrchestratorConfig,
        *,
        metrics: OrchestratorMetrics | None = None,
        error_log: BindableLogger | logging.Logger | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            config: Fixed configuration (name, timeout, metrics and logging flags)
            metrics: Metrics sink; defaults to the process-wide sink
            error_log: Sink for failure logs; defaults to this module's structlog
                logger. A stdlib ``logging.Logger`` is wrapped so the key/value
                fields are rendered into the message.
        """
        self._config = config
        self._metrics = metrics if metrics is not None else get_orchestrator_metrics()
        self._error_log = as_structured_logger(error_log)

    @abstractmethod
    async def initialize_context(self, input: TInput) -> TContext:
        """Build the initial pipeline context from the input."""

    @abstractmethod
    def get_pipeline(self) -> list[PipelineStage[TContext]]:
        """Define the ordered pipeline stages."""

    @abstractmethod
    def build_result(self, context: TContext) -> TResult:
        """Build the final result from the context. May raise."""

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    def get_name(self) -> str:
        """Get the orchestrator name."""
        return self._config.name

    def is_metrics_enabled(self) -> bool:
        """Check if metrics are enabled."""
        return self._config.enable_metrics

    async def execute(self, input: TInput) -> OrchestratorResult[TResult]:
        """
        Execute the orchestration pipeline.

        Never raises for pipeline failures: initialization errors, stage
        timeouts, critical stage failures, pipeline timeouts and result
        building errors all resolve to a failed OrchestratorResult.

        Args:
            input: Orchestrator-specific request payload

        Returns:
            OrchestratorResult with data on success or the terminal error on
            failure; ``metrics`` holds whatever the tracker recorded
        """
        name = self._config.name
        metrics_enabled = self._config.enable_metrics
        start = time.perf_counter()
        status = STATUS_ERROR
        context: TContext | None = None

        if metrics_enabled:
            self._metrics.operation_started(name)

        try:
            context = await self.initialize_context(input)

            if context.perf_tracker is None:
                context.perf_tracker = (
                    DefaultPerformanceTracker() if metrics_enabled else NullPerformanceTracker()
                )
            context.metadata.setdefault("orchestrator", name)

            pipeline = self.get_pipeline()
            validate_pipeline(pipeline)

            logger.debug(
                "pipeline_started",
                orchestrator=name,
                request_id=context.request_id,
                stages=[stage.name for stage in pipeline],
            )

            context = await self._run_pipeline_with_timeout(context, pipeline)
            data = self.build_result(context)

            status = STATUS_SUCCESS
            duration_ms = (time.perf_counter() - start) * 1000

            logger.debug(
                "pipeline_complete",
                orchestrator=name,
                request_id=context.request_id,
                duration_ms=round(duration_ms, 2),
                soft_errors=len(context.errors),
            )

            return OrchestratorResult.ok(
                data,
                duration_ms=duration_ms,
                metrics=context.perf_tracker.get_metrics(),
            )

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000

            # Critical stage failures were already counted under their stage label
            if metrics_enabled and not isinstance(exc, CriticalStageError):
                self._metrics.record_error(name, UNKNOWN_STAGE)

            if self._config.log_errors:
                self._error_log.error(
                    "orchestration_failed",
                    orchestrator=name,
                    request_id=context.request_id if context is not None else None,
                    stage=getattr(exc, "stage", None),
                    error=str(exc),
                    error_type=type(exc).__name__,
                    duration_ms=round(duration_ms, 2),
                )

            tracker = context.perf_tracker if context is not None else None
            return OrchestratorResult.fail(
                exc,
                duration_ms=duration_ms,
                metrics=tracker.get_metrics() if tracker is not None else {},
            )

        finally:
            # Runs for every outcome, including caller cancellation
            if metrics_enabled:
                self._metrics.observe_pipeline(
                    name, status, (time.perf_counter() - start) * 1000
                )
                self._metrics.operation_finished(name)

    async def _run_pipeline_with_timeout(
        self, context: TContext, pipeline: list[PipelineStage[TContext]]
    ) -> TContext:
        """Race the whole stage loop against the pipeline timeout."""
        return await self._race(
            self._run_pipeline(context, pipeline),
            self._config.timeout_ms,
            lambda: PipelineTimeoutError(self._config.name, self._config.timeout_ms),
            label="pipeline",
            request_id=context.request_id,
        )

    async def _run_pipeline(
        self, context: TContext, pipeline: list[PipelineStage[TContext]]
    ) -> TContext:
        """Execute the pipeline stages sequentially."""
        current = context
        for stage in pipeline:
            current = await self._run_stage(stage, current)
        return current

    async def _run_stage(self, stage: PipelineStage[TContext], context: TContext) -> TContext:
        """
        Run one stage with timing, its optional timeout and the failure policy.

        Returns:
            The context to hand to the next stage

        Raises:
            CriticalStageError: If a critical stage fails or times out
        """
        abandoned = asyncio.Event()
        operation = wrap_operation(stage.operation, stage.name, abandoned=abandoned)
        start = time.perf_counter()

        logger.debug(
            "pipeline_stage_start",
            orchestrator=self._config.name,
            stage=stage.name,
            request_id=context.request_id,
        )

        try:
            if stage.has_timeout:
                result = await self._race(
                    operation(context),
                    stage.timeout_ms,
                    lambda: StageTimeoutError(stage.name, stage.timeout_ms),
                    label=stage.name,
                    request_id=context.request_id,
                )
            else:
                result = await operation(context)
        except StageTimeoutError as exc:
            # The wrapper is still waiting on the operation; silence it and
            # record the attempt here so the stage keeps a single entry
            abandoned.set()
            duration_ms = (time.perf_counter() - start) * 1000
            record_duration(context, error_key(stage.name), duration_ms)
            return self._handle_stage_failure(stage, context, exc, duration_ms)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            return self._handle_stage_failure(stage, context, exc, duration_ms)

        duration_ms = (time.perf_counter() - start) * 1000
        if self._config.enable_metrics:
            self._metrics.observe_stage(self._config.name, stage.name, duration_ms)

        logger.debug(
            "pipeline_stage_complete",
            orchestrator=self._config.name,
            stage=stage.name,
            execution_time_ms=round(duration_ms, 2),
            request_id=context.request_id,
        )

        return result

    def _handle_stage_failure(
        self,
        stage: PipelineStage[TContext],
        context: TContext,
        error: Exception,
        duration_ms: float,
    ) -> TContext:
        """Apply the critical / non-critical policy to a failed stage."""
        if self._config.enable_metrics:
            self._metrics.record_error(self._config.name, stage.name)
            self._metrics.observe_stage(self._config.name, stage.name, duration_ms)

        if stage.critical:
            raise CriticalStageError(stage.name, error) from error

        if self._config.log_errors:
            self._error_log.warning(
                "non_critical_stage_failed",
                orchestrator=self._config.name,
                stage=stage.name,
                error=str(error),
                error_type=type(error).__name__,
                request_id=context.request_id,
            )

        # Partial mutations made by the failed stage are kept
        context.errors.append(error)
        return context

    async def _race(
        self,
        awaitable: Awaitable[T],
        timeout_ms: float,
        on_timeout: Callable[[], Exception],
        *,
        label: str,
        request_id: str,
    ) -> T:
        """
        Wait for ``awaitable`` for at most ``timeout_ms``.

        On timeout the underlying task is left running (see module docstring)
        and the exception built by ``on_timeout`` is raised. Cancellation of
        the waiting caller is forwarded to the task.
        """
        task = asyncio.ensure_future(awaitable)
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task in done:
            return task.result()

        self._detach(task, label=label, request_id=request_id)
        raise on_timeout()

    def _detach(self, task: asyncio.Task, *, label: str, request_id: str) -> None:
        """Keep a timed-out task alive and log its eventual outcome."""
        _orphaned_tasks.add(task)
        orchestrator = self._config.name

        def _on_done(finished: asyncio.Task) -> None:
            _orphaned_tasks.discard(finished)
            if finished.cancelled():
                return
            error = finished.exception()
            logger.info(
                "orphaned_operation_finished",
                orchestrator=orchestrator,
                operation=label,
                request_id=request_id,
                success=error is None,
                error=str(error) if error is not None else None,
            )

        task.add_done_callback(_on_done)
