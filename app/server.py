"""Process entrypoint: bind the listener, then hand it to uvicorn.

RUN:  hello-metrics          (console script)
      python -m app
      PORT=8080 python -m app

The socket is bound here rather than inside uvicorn so that the port we
log is the one the kernel actually gave us (PORT=0 asks for an ephemeral
port) and so that a bind failure maps to a clean exit status instead of
a half-started server.
"""

from __future__ import annotations

import logging
import os
import socket
import sys

import uvicorn

from app.core.config import DEFAULT_PORT, SETTINGS, Settings, invalid_port_reason
from app.main import app

logger = logging.getLogger(__name__)


class ListenerBindError(RuntimeError):
    """The listening socket could not be bound (port in use, no permission)."""

    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(f"cannot bind {host}:{port}: {reason}")
        self.host = host
        self.port = port


def bind_listener(host: str, port: int, backlog: int = 2048) -> socket.socket:
    """Bind and listen on host:port, returning the ready socket.

    Raises ListenerBindError on failure; the socket is closed first so
    nothing is left bound.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        # Lets a restarted process reuse a port in TIME_WAIT.  It does not
        # allow binding over another live listener.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(backlog)
    except OSError as exc:
        sock.close()
        raise ListenerBindError(host, port, exc.strerror or str(exc)) from exc
    return sock


def _warn_on_port_fallback() -> None:
    raw = os.environ.get("PORT", "").strip()
    reason = invalid_port_reason(raw)
    if reason is not None:
        logger.warning("ignoring PORT=%r (%s), using %d", raw, reason, DEFAULT_PORT)


def serve(settings: Settings = SETTINGS) -> int:
    """Run the service until uvicorn stops; return the process exit code."""
    _warn_on_port_fallback()

    try:
        sock = bind_listener(settings.host, settings.port)
    except ListenerBindError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("listening on %d", sock.getsockname()[1])

    config = uvicorn.Config(
        app,
        log_config=None,  # keep the handlers installed by setup_logging
        access_log=False,  # RequestContextMiddleware logs each request
        lifespan="off",
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()

    # uvicorn returns without raising when startup fails
    return 0 if server.started else 1


def main() -> None:
    sys.exit(serve())
