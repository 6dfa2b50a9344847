"""
Prometheus exposition endpoint.

Mounted at ``settings.metrics_path`` when ``settings.metrics_enabled``.
"""

from fastapi import APIRouter, Response

from service_starter.config import settings
from service_starter.observability.metrics import render_latest

router = APIRouter(tags=["monitoring"])


@router.get(settings.metrics_path, include_in_schema=False)
async def prometheus_metrics() -> Response:
    payload, content_type = render_latest()
    return Response(content=payload, media_type=content_type)
