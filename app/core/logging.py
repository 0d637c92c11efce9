"""Logging configuration for the service.

Two formatters, picked by the LOG_JSON setting:

  _ContainerFormatter: human-readable, single-line, for local dev.
    You read these with your eyes in a terminal.

  _JsonFormatter: one JSON object per line, for production.
    Log aggregation systems parse JSON natively, so fields such as
    request_id and duration_ms become filterable without regex.

Metrics are the other observability signal this service emits; see
app/core/metrics.py.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar

# Set by RequestContextMiddleware for the duration of each request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    """Stamp the current request ID onto every LogRecord.

    A filter can add attributes before formatting; a formatter can only
    read what is already there.  Installed on the handler, so records
    propagated from any logger pass through it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True



_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# Loggers whose INFO lines are part of the service contract and must be
# emitted whatever LOG_LEVEL says ("listening on <port>").
_ALWAYS_INFO = ("app.server",)

# Chatty dependencies held at WARNING or above.
_QUIET = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx")


class _MillisFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = super().formatTime(record, datefmt or _DATEFMT)
        # 2024-01-01T12:00:00+0000 -> 2024-01-01T12:00:00.123+0000
        return f"{stamp[:-5]}.{int(record.msecs):03d}{stamp[-5:]}"


class _ContainerFormatter(_MillisFormatter):
    """One line per record for container stdout.

    WARNING and above carry a [file:line] suffix; tracebacks are appended
    when the record has exc_info.
    """

    _PLAIN = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"
    _LOCATED = _PLAIN + "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(self._PLAIN, datefmt=_DATEFMT)
        self._located = _MillisFormatter(self._LOCATED, datefmt=_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self._located.format(record)
        return super().format(record)


class _JsonFormatter(logging.Formatter):
    """JSON Lines output; request context fields become top-level keys."""

    _CONTEXT_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")

    def __init__(self) -> None:
        super().__init__(datefmt=_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self._CONTEXT_FIELDS:
            value = getattr(record, key, None)
            # "-" is the filter's placeholder outside a request
            if value not in (None, "-"):
                entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Route all logging to stdout through a single handler.

    Args:
        level_name: debug/info/warning/error; unknown names mean INFO.
        json_format: emit JSON lines instead of the container format
                     (LOG_JSON in Settings).
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())
    handler.addFilter(_RequestContextFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _ALWAYS_INFO:
        logging.getLogger(name).setLevel(min(level, logging.INFO))
    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
