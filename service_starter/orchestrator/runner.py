"""
Hook-free orchestration.

Builds an orchestrator from a config and three plain functions instead of a
subclass. Useful for one-off pipelines and tests.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from structlog.typing import BindableLogger

from service_starter.observability.metrics import OrchestratorMetrics
from service_starter.orchestrator.base import BaseOrchestrator
from service_starter.orchestrator.config import OrchestratorConfig
from service_starter.orchestrator.pipeline.context import OperationContext
from service_starter.orchestrator.pipeline.result import OrchestratorResult
from service_starter.orchestrator.pipeline.stage import PipelineStage

TContext = TypeVar("TContext", bound=OperationContext)
TResult = TypeVar("TResult")
TInput = TypeVar("TInput")

ContextFactory = Callable[[TInput], TContext | Awaitable[TContext]]
PipelineFactory = Callable[[], list[PipelineStage[TContext]]]
ResultBuilder = Callable[[TContext], TResult]


class CallableOrchestrator(
    BaseOrchestrator[TContext, TResult, TInput], Generic[TContext, TResult, TInput]
):
    """
    Orchestrator whose hooks are supplied as functions.

    ``initialize_context`` may be a plain or an async function.

    Example:
        >>> orchestrator = CallableOrchestrator(
        ...     OrchestratorConfig(name="word-count"),
        ...     initialize_context=lambda text: OperationContext(input=text),
        ...     get_pipeline=lambda: [PipelineStage("count", count_words)],
        ...     build_result=lambda ctx: ctx.results["count"],
        ... )
        >>> result = await orchestrator.execute("a b c")
    """

    def __init__(
        self,
        config: OrchestratorConfig,
        initialize_context: ContextFactory,
        get_pipeline: PipelineFactory,
        build_result: ResultBuilder,
        *,
        metrics: OrchestratorMetrics | None = None,
        error_log: BindableLogger | logging.Logger | None = None,
    ) -> None:
        super().__init__(config, metrics=metrics, error_log=error_log)
        self._initialize_context = initialize_context
        self._get_pipeline = get_pipeline
        self._build_result = build_result

    async def initialize_context(self, input: TInput) -> TContext:
        context = self._initialize_context(input)
        if inspect.isawaitable(context):
            context = await context
        return context

    def get_pipeline(self) -> list[PipelineStage[TContext]]:
        return list(self._get_pipeline())

    def build_result(self, context: TContext) -> TResult:
        return self._build_result(context)


async def run_pipeline(
    input: TInput,
    *,
    config: OrchestratorConfig,
    initialize_context: ContextFactory,
    get_pipeline: PipelineFactory,
    build_result: ResultBuilder,
    metrics: OrchestratorMetrics | None = None,
    error_log: BindableLogger | logging.Logger | None = None,
) -> OrchestratorResult[TResult]:
    """
    Run a pipeline once without declaring an orchestrator class.

    Args:
        input: Request payload
        config: Orchestrator configuration
        initialize_context: input -> context (sync or async)
        get_pipeline: () -> ordered stage list
        build_result: context -> result payload
        metrics: Metrics sink; defaults to the process-wide sink
        error_log: Sink for failure logs

    Returns:
        OrchestratorResult of the execution
    """
    orchestrator: CallableOrchestrator = CallableOrchestrator(
        config,
        initialize_context,
        get_pipeline,
        build_result,
        metrics=metrics,
        error_log=error_log,
    )
    return await orchestrator.execute(input)
