"""
Orchestration core.

Runs a named, ordered sequence of async stages over a shared mutable context
with per-stage and whole-pipeline timeouts, critical vs non-critical stage
failures, and per-stage latency/error telemetry.

Components:
- BaseOrchestrator: abstract orchestrator with context/pipeline/result hooks
- CallableOrchestrator / run_pipeline: the same engine driven by plain functions
- OperationContext: per-execution context threaded through the stages
- PipelineStage: static stage declaration (name, operation, critical, timeout)
- DefaultPerformanceTracker / NullPerformanceTracker: stage duration recorders
- OrchestratorResult: typed execution outcome
"""

from service_starter.orchestrator.base import BaseOrchestrator, orphaned_task_count
from service_starter.orchestrator.config import OrchestratorConfig
from service_starter.orchestrator.errors import (
    CriticalStageError,
    OrchestratorError,
    PipelineTimeoutError,
    StageTimeoutError,
)
from service_starter.orchestrator.pipeline import (
    ERROR_SUFFIX,
    DefaultPerformanceTracker,
    NullPerformanceTracker,
    OperationContext,
    OperationContextBuilder,
    OrchestratorResult,
    PerformanceTracker,
    PipelineStage,
    StageOperation,
    timed_operation,
    wrap_operation,
    wrap_pipeline,
)
from service_starter.orchestrator.runner import CallableOrchestrator, run_pipeline

__all__ = [
    "BaseOrchestrator",
    "CallableOrchestrator",
    "CriticalStageError",
    "DefaultPerformanceTracker",
    "ERROR_SUFFIX",
    "NullPerformanceTracker",
    "OperationContext",
    "OperationContextBuilder",
    "OrchestratorConfig",
    "OrchestratorError",
    "OrchestratorResult",
    "PerformanceTracker",
    "PipelineStage",
    "PipelineTimeoutError",
    "StageOperation",
    "StageTimeoutError",
    "orphaned_task_count",
    "run_pipeline",
    "timed_operation",
    "wrap_operation",
    "wrap_pipeline",
]
