"""
HTTP Metrics Middleware.

Records request count, duration and in-flight requests per method and route
template into the Prometheus HTTP instruments.
"""

from __future__ import annotations

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from service_starter.observability.metrics import HttpMetrics, get_http_metrics


def _route_label(request: Request) -> str:
    """Route template (e.g. /api/v1/todos) rather than the raw URL."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or request.url.path


class HttpMetricsMiddleware(BaseHTTPMiddleware):
    """Prometheus instrumentation for every HTTP request."""

    def __init__(self, app: ASGIApp, metrics: HttpMetrics | None = None) -> None:
        super().__init__(app)
        self.metrics = metrics if metrics is not None else get_http_metrics()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        self.metrics.request_started(method)
        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            self.metrics.request_finished(
                method, _route_label(request), status_code, time.perf_counter() - start
            )
