"""Service starter: web service scaffold with a pipeline orchestration core."""

__version__ = "0.1.0"
