"""Greeting endpoint.

The only route with a side effect: every hit bumps http_requests_total
before the response goes out, so a scrape that starts after this
handler returns always sees the increment.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.core.metrics import REQUEST_COUNT

GREETING = "Hello from simple-node-app!"

router = APIRouter(tags=["greeting"])


@router.get("/", response_class=PlainTextResponse)
async def greeting() -> PlainTextResponse:
    REQUEST_COUNT.inc()
    return PlainTextResponse(GREETING)
