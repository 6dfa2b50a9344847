"""
Unit tests for CallableOrchestrator and run_pipeline.
"""

import pytest

from service_starter.orchestrator.config import OrchestratorConfig
from service_starter.orchestrator.errors import CriticalStageError
from service_starter.orchestrator.pipeline.context import OperationContext
from service_starter.orchestrator.pipeline.stage import PipelineStage
from service_starter.orchestrator.runner import CallableOrchestrator, run_pipeline


async def count_words(context):
    context.results["count"] = len(context.input.split())
    return context


class TestCallableOrchestrator:
    """Tests for CallableOrchestrator."""

    @pytest.mark.asyncio
    async def test_sync_context_factory(self, orchestrator_metrics):
        """Test a plain function can build the context."""
        orchestrator = CallableOrchestrator(
            OrchestratorConfig(name="word-count"),
            initialize_context=lambda text: OperationContext(input=text),
            get_pipeline=lambda: [PipelineStage("count", count_words)],
            build_result=lambda context: context.results["count"],
            metrics=orchestrator_metrics,
        )

        result = await orchestrator.execute("a b c")

        assert result.success is True
        assert result.data == 3
        assert "count" in result.metrics

    @pytest.mark.asyncio
    async def test_async_context_factory(self, orchestrator_metrics):
        """Test an async function can build the context."""

        async def init(text):
            return OperationContext(input=text.upper())

        orchestrator = CallableOrchestrator(
            OrchestratorConfig(name="upper"),
            initialize_context=init,
            get_pipeline=lambda: [],
            build_result=lambda context: context.input,
            metrics=orchestrator_metrics,
        )

        result = await orchestrator.execute("abc")

        assert result.data == "ABC"

    @pytest.mark.asyncio
    async def test_failure_propagates_as_result(self, orchestrator_metrics):
        """Test a failing stage yields a failed result."""

        async def boom(context):
            raise RuntimeError("nope")

        orchestrator = CallableOrchestrator(
            OrchestratorConfig(name="boom"),
            initialize_context=lambda value: OperationContext(input=value),
            get_pipeline=lambda: [PipelineStage("boom", boom)],
            build_result=lambda context: None,
            metrics=orchestrator_metrics,
        )

        result = await orchestrator.execute(None)

        assert result.success is False
        assert isinstance(result.error, CriticalStageError)


class TestRunPipeline:
    """Tests for run_pipeline."""

    @pytest.mark.asyncio
    async def test_run_once(self, orchestrator_metrics):
        """Test running a pipeline without declaring a class."""
        result = await run_pipeline(
            "one two",
            config=OrchestratorConfig(name="once"),
            initialize_context=lambda text: OperationContext(input=text),
            get_pipeline=lambda: [PipelineStage("count", count_words)],
            build_result=lambda context: context.results["count"],
            metrics=orchestrator_metrics,
        )

        assert result.success is True
        assert result.data == 2
