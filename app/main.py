from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.greeting import router as greeting_router
from app.api.health import router as health_router
from app.api.metrics_endpoint import router as metrics_router
from app.core.config import SETTINGS
from app.core.logging import setup_logging
from app.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

# only app setup + router registration

app = FastAPI(
    title="hello-metrics-service",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
    openapi_url="/openapi.json" if SETTINGS.is_dev else None,
)

app.add_middleware(RequestContextMiddleware)

app.include_router(greeting_router)
app.include_router(health_router)
app.include_router(metrics_router)

logger.debug(
    "app configured  env=%s log_level=%s log_json=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.log_json,
)
