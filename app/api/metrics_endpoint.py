"""Prometheus metrics endpoint.

Prometheus calls this endpoint every N seconds to collect the current
metric values.  It returns plain text in Prometheus exposition format,
NOT JSON.

Example output:
  # HELP http_requests_total Total number of HTTP requests
  # TYPE http_requests_total counter
  http_requests_total 1432.0

A scrape is read-only: nothing here touches the counters it reports.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose all Prometheus metrics in text exposition format."""
    try:
        payload = generate_latest(REGISTRY)
    except Exception as exc:
        logger.exception("metrics serialization failed")
        return PlainTextResponse(str(exc), status_code=500)

    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
