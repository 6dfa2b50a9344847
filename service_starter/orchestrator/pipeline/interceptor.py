"""
Stage Wrapper.

Decorates pipeline operations with automatic timing capture into the
context's performance tracker. Failure policy belongs to the orchestrator:
the wrapper records the duration and re-raises.
"""

import asyncio
import functools
import time
from collections.abc import Sequence
from typing import Any

import structlog

from service_starter.orchestrator.pipeline.stage import PipelineStage, StageOperation

logger = structlog.get_logger(__name__)

# Failed durations are tracked under a separate key so they never merge
# with successful ones for the same stage
ERROR_SUFFIX = "_error"


def error_key(stage_name: str) -> str:
    """Tracker key used for a failed run of a stage."""
    return f"{stage_name}{ERROR_SUFFIX}"


def record_duration(context: Any, key: str, duration_ms: float) -> None:
    """Write a duration into the context's tracker, if it has one."""
    tracker = getattr(context, "perf_tracker", None)
    if tracker is not None:
        tracker.track(key, duration_ms)


def wrap_operation(
    operation: StageOperation,
    name: str,
    *,
    abandoned: asyncio.Event | None = None,
) -> StageOperation:
    """
    Wrap a pipeline operation to track its duration.

    Args:
        operation: Async function context -> context
        name: Stage name used as the tracker key
        abandoned: Set by the caller once it stops waiting for this run (e.g.
            on a stage timeout); a run finishing after that records nothing

    Returns:
        Async callable with the same signature as ``operation``
    """

    def still_wanted() -> bool:
        return abandoned is None or not abandoned.is_set()

    @functools.wraps(operation)
    async def wrapper(context: Any) -> Any:
        start = time.perf_counter()
        try:
            result = await operation(context)
        except Exception:
            if still_wanted():
                record_duration(context, error_key(name), (time.perf_counter() - start) * 1000)
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        if not still_wanted():
            return result
        record_duration(context, name, elapsed_ms)

        logger.debug(
            "timed_operation",
            operation=name,
            execution_time_ms=round(elapsed_ms, 2),
        )

        return result

    return wrapper


def wrap_pipeline(stages: Sequence[PipelineStage]) -> list[StageOperation]:
    """Wrap every stage operation in a pipeline with timing."""
    return [wrap_operation(stage.operation, stage.name) for stage in stages]


def timed_operation(name: str | None = None):
    """
    Decorator form of :func:`wrap_operation`.

    Example:
        >>> @timed_operation("enrich")
        ... async def enrich(context):
        ...     return context
    """

    def decorator(func: StageOperation) -> StageOperation:
        return wrap_operation(func, name or func.__name__)

    return decorator
