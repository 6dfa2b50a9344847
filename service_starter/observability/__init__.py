"""Observability: Prometheus instruments for orchestrators and the HTTP layer."""

from service_starter.observability.metrics import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    UNKNOWN_STAGE,
    HttpMetrics,
    OrchestratorMetrics,
    get_http_metrics,
    get_orchestrator_metrics,
    render_latest,
    reset_orchestrator_metrics,
    set_http_metrics,
    set_orchestrator_metrics,
)

__all__ = [
    "HttpMetrics",
    "OrchestratorMetrics",
    "STATUS_ERROR",
    "STATUS_SUCCESS",
    "UNKNOWN_STAGE",
    "get_http_metrics",
    "get_orchestrator_metrics",
    "render_latest",
    "reset_orchestrator_metrics",
    "set_http_metrics",
    "set_orchestrator_metrics",
]
