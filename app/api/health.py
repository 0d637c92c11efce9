"""Liveness endpoint.

"Is this process alive and not deadlocked?"  If the event loop can run
this handler, the answer is yes.  There are no backing services to
check, so the body is constant.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> JSONResponse:
    # JSONResponse renders compactly: {"status":"ok"}
    return JSONResponse({"status": "ok"})
