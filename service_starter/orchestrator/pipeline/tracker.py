"""
Performance Trackers.

Per-execution recorders of stage durations. The orchestrator attaches one
tracker to each pipeline context; the stage wrapper writes into it and the
orchestrator reads a snapshot once the pipeline finishes.
"""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class PerformanceTracker(Protocol):
    """Records stage durations in milliseconds for a single execution."""

    def track(self, stage_name: str, duration_ms: float) -> None: ...

    def get_metrics(self) -> dict[str, float]: ...

    def get_total_duration(self) -> float: ...


class DefaultPerformanceTracker:
    """
    Recording tracker.

    Holds at most one duration per stage name; tracking the same name twice
    overwrites the earlier value.

    Example:
        >>> tracker = DefaultPerformanceTracker()
        >>> tracker.track("validate-input", 1.5)
        >>> tracker.get_metrics()
        {'validate-input': 1.5}
    """

    def __init__(self) -> None:
        self._metrics: dict[str, float] = {}
        self._start_time = time.perf_counter()

    def track(self, stage_name: str, duration_ms: float) -> None:
        """Record (or overwrite) the duration for a stage."""
        self._metrics[stage_name] = duration_ms

    def get_metrics(self) -> dict[str, float]:
        """Return a snapshot copy of all recorded durations."""
        return dict(self._metrics)

    def get_total_duration(self) -> float:
        """Milliseconds elapsed since the tracker was created."""
        return (time.perf_counter() - self._start_time) * 1000


class NullPerformanceTracker:
    """Tracker used when metrics are disabled. Records nothing."""

    def track(self, stage_name: str, duration_ms: float) -> None:
        pass

    def get_metrics(self) -> dict[str, float]:
        return {}

    def get_total_duration(self) -> float:
        return 0.0
