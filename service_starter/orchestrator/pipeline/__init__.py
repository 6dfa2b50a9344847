"""
Pipeline Infrastructure Package.

Provides context, stage declarations, timing and result types for orchestrators.
"""

from service_starter.orchestrator.pipeline.context import (
    OperationContext,
    OperationContextBuilder,
)
from service_starter.orchestrator.pipeline.interceptor import (
    ERROR_SUFFIX,
    timed_operation,
    wrap_operation,
    wrap_pipeline,
)
from service_starter.orchestrator.pipeline.result import OrchestratorResult
from service_starter.orchestrator.pipeline.stage import (
    PipelineStage,
    StageOperation,
    validate_pipeline,
)
from service_starter.orchestrator.pipeline.tracker import (
    DefaultPerformanceTracker,
    NullPerformanceTracker,
    PerformanceTracker,
)

__all__ = [
    "DefaultPerformanceTracker",
    "ERROR_SUFFIX",
    "NullPerformanceTracker",
    "OperationContext",
    "OperationContextBuilder",
    "OrchestratorResult",
    "PerformanceTracker",
    "PipelineStage",
    "StageOperation",
    "timed_operation",
    "validate_pipeline",
    "wrap_operation",
    "wrap_pipeline",
]
