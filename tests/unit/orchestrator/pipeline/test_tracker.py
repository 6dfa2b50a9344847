"""
Unit tests for the performance trackers.
"""

import time

from service_starter.orchestrator.pipeline.tracker import (
    DefaultPerformanceTracker,
    NullPerformanceTracker,
    PerformanceTracker,
)


class TestDefaultPerformanceTracker:
    """Tests for DefaultPerformanceTracker."""

    def test_track_and_get_metrics(self):
        """Test recorded durations are returned by stage name."""
        tracker = DefaultPerformanceTracker()

        tracker.track("validate-input", 1.5)
        tracker.track("create-todo", 12.0)

        assert tracker.get_metrics() == {"validate-input": 1.5, "create-todo": 12.0}

    def test_track_same_name_overwrites(self):
        """Test tracking a name twice keeps only the latest value."""
        tracker = DefaultPerformanceTracker()

        tracker.track("a", 1.0)
        tracker.track("a", 7.0)

        assert tracker.get_metrics() == {"a": 7.0}

    def test_get_metrics_returns_snapshot(self):
        """Test mutating the returned map does not affect the tracker."""
        tracker = DefaultPerformanceTracker()
        tracker.track("a", 1.0)

        snapshot = tracker.get_metrics()
        snapshot["b"] = 2.0
        tracker.track("c", 3.0)

        assert "b" not in tracker.get_metrics()
        assert "c" not in snapshot

    def test_total_duration_grows(self):
        """Test total duration is measured from tracker creation."""
        tracker = DefaultPerformanceTracker()
        time.sleep(0.01)

        assert tracker.get_total_duration() >= 5.0

    def test_satisfies_protocol(self):
        """Test the tracker matches the PerformanceTracker protocol."""
        assert isinstance(DefaultPerformanceTracker(), PerformanceTracker)


class TestNullPerformanceTracker:
    """Tests for NullPerformanceTracker."""

    def test_records_nothing(self):
        """Test tracking is ignored."""
        tracker = NullPerformanceTracker()

        tracker.track("a", 5.0)

        assert tracker.get_metrics() == {}
        assert tracker.get_total_duration() == 0.0

    def test_satisfies_protocol(self):
        """Test the null tracker matches the PerformanceTracker protocol."""
        assert isinstance(NullPerformanceTracker(), PerformanceTracker)
