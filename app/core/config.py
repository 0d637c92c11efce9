from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it’s easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


def invalid_port_reason(raw: str) -> str | None:
    """Why a PORT value can't be used, or None when it can (or is unset).

    PORT=0 is accepted and asks the OS for an ephemeral port.
    """
    if not raw:
        return None
    try:
        port = int(raw)
    except ValueError:
        return "not an integer"
    if not 0 <= port <= 65535:
        return "out of range"
    return None


def _parse_port(raw: str) -> int:
    # Logging isn't configured yet at import; app.server reports the fallback.
    if not raw or invalid_port_reason(raw) is not None:
        return DEFAULT_PORT
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    host: str
    port: int

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in ("1", "true", "yes", "on"),
        host=_getenv("HOST", DEFAULT_HOST) or DEFAULT_HOST,
        port=_parse_port(_getenv("PORT", "")),
    )


# Resolved once at import; the listener and app factory both read this.
SETTINGS = load_settings()
