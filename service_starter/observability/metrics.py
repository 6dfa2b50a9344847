"""
Prometheus Metrics.

Shared instruments for every orchestrator (active operations, pipeline
duration, stage latency, pipeline errors) plus HTTP request instruments.

Label keys ``service`` and ``stage`` and the status values ``success`` /
``error`` are consumed by external dashboards and must stay stable.

Instruments live in a ``CollectorRegistry``. Production code uses the
process-global registry through ``get_orchestrator_metrics()``; tests build
an ``OrchestratorMetrics`` on a fresh registry and inject it.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

# Stage label for failures outside the stage loop (initialization, result
# building, pipeline timeout)
UNKNOWN_STAGE = "unknown"

PIPELINE_DURATION_BUCKETS = (1, 2.5, 5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000)
STAGE_LATENCY_BUCKETS = (0.5, 1, 2.5, 5, 10, 25, 50, 100, 250, 500, 1000)
HTTP_DURATION_BUCKETS = (0.001, 0.005, 0.015, 0.05, 0.1, 0.2, 0.3, 0.4, 0.5, 1, 2, 5)


class OrchestratorMetrics:
    """
    Metrics sink shared by all orchestrators.

    prometheus_client instruments are thread-safe, so one instance can be
    updated by many concurrently running pipelines.

    Example:
        >>> registry = CollectorRegistry()
        >>> metrics = OrchestratorMetrics(registry)
        >>> metrics.record_error("CreateTodoOrchestrator", "create-todo")
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        self.active_operations = Gauge(
            "orchestrator_active_operations",
            "Number of currently active orchestrator operations",
            labelnames=["service"],
            registry=self.registry,
        )

        self.pipeline_duration = Histogram(
            "orchestrator_pipeline_duration_ms",
            "Duration of orchestrator pipeline execution in milliseconds",
            labelnames=["service", "status"],
            buckets=PIPELINE_DURATION_BUCKETS,
            registry=self.registry,
        )

        self.stage_latency = Histogram(
            "orchestrator_stage_latency_ms",
            "Latency of individual pipeline stages in milliseconds",
            labelnames=["service", "stage"],
            buckets=STAGE_LATENCY_BUCKETS,
            registry=self.registry,
        )

        self.pipeline_errors = Counter(
            "orchestrator_pipeline_errors_total",
            "Total number of pipeline errors",
            labelnames=["service", "stage"],
            registry=self.registry,
        )

    def operation_started(self, service: str) -> None:
        self.active_operations.labels(service=service).inc()

    def operation_finished(self, service: str) -> None:
        self.active_operations.labels(service=service).dec()

    def observe_pipeline(self, service: str, status: str, duration_ms: float) -> None:
        """Record one completed ``execute`` call."""
        self.pipeline_duration.labels(service=service, status=status).observe(duration_ms)

    def observe_stage(self, service: str, stage: str, duration_ms: float) -> None:
        self.stage_latency.labels(service=service, stage=stage).observe(duration_ms)

    def record_error(self, service: str, stage: str = UNKNOWN_STAGE) -> None:
        self.pipeline_errors.labels(service=service, stage=stage).inc()


class HttpMetrics:
    """HTTP request instruments recorded by the API middleware."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            labelnames=["method", "route", "status_code"],
            registry=self.registry,
        )

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            labelnames=["method", "route", "status_code"],
            buckets=HTTP_DURATION_BUCKETS,
            registry=self.registry,
        )

        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "Number of HTTP requests in progress",
            labelnames=["method"],
            registry=self.registry,
        )

    def request_started(self, method: str) -> None:
        self.requests_in_progress.labels(method=method).inc()

    def request_finished(
        self, method: str, route: str, status_code: int, duration_seconds: float
    ) -> None:
        labels = {"method": method, "route": route, "status_code": str(status_code)}
        self.request_duration.labels(**labels).observe(duration_seconds)
        self.requests_total.labels(**labels).inc()
        self.requests_in_progress.labels(method=method).dec()


# Sink on the global registry, built at most once: Prometheus refuses a second
# registration of the same instrument names
_default_orchestrator_metrics: OrchestratorMetrics | None = None
# Explicit override installed with set_orchestrator_metrics()
_orchestrator_metrics: OrchestratorMetrics | None = None
_http_metrics: HttpMetrics | None = None


def get_orchestrator_metrics() -> OrchestratorMetrics:
    """
    Get the process-wide orchestrator metrics sink.

    Returns the installed override if any, otherwise the sink on the global
    registry (created on first call).
    """
    global _default_orchestrator_metrics
    if _orchestrator_metrics is not None:
        return _orchestrator_metrics
    if _default_orchestrator_metrics is None:
        _default_orchestrator_metrics = OrchestratorMetrics()
    return _default_orchestrator_metrics


def set_orchestrator_metrics(metrics: OrchestratorMetrics) -> None:
    """Install an explicit process-wide sink (e.g. on a custom registry)."""
    global _orchestrator_metrics
    _orchestrator_metrics = metrics


def reset_orchestrator_metrics() -> None:
    """
    Drop the installed override (for testing).

    Later calls to get_orchestrator_metrics() return the global-registry sink
    again; its instruments stay registered.
    """
    global _orchestrator_metrics
    _orchestrator_metrics = None


def get_http_metrics() -> HttpMetrics:
    """Get the process-wide HTTP metrics, created on first call."""
    global _http_metrics
    if _http_metrics is None:
        _http_metrics = HttpMetrics()
    return _http_metrics


def set_http_metrics(metrics: HttpMetrics) -> None:
    global _http_metrics
    _http_metrics = metrics


def render_latest(registry: CollectorRegistry | None = None) -> tuple[bytes, str]:
    """
    Render a registry in the Prometheus text exposition format.

    Returns:
        Tuple of (payload, content type)
    """
    return generate_latest(registry if registry is not None else REGISTRY), CONTENT_TYPE_LATEST
