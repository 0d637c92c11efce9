from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are resolved at import time, so pin them before importing the app.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "info")

from fastapi.testclient import TestClient  # noqa: E402
from prometheus_client import REGISTRY  # noqa: E402

from app.main import app  # noqa: E402

_COUNTER_LINE = re.compile(r"^http_requests_total (\S+)$", re.MULTILINE)


def _scraped_request_count(body: str) -> float:
    match = _COUNTER_LINE.search(body)
    assert match is not None, "http_requests_total sample missing from scrape"
    return float(match.group(1))


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def scraped_request_count() -> Callable[[str], float]:
    """Pull the http_requests_total sample out of an exposition body."""
    return _scraped_request_count


@pytest.fixture
def request_count() -> Callable[[], float]:
    """Read http_requests_total straight from the default registry."""

    def _read() -> float:
        value = REGISTRY.get_sample_value("http_requests_total")
        return value if value is not None else 0.0

    return _read
