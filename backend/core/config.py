"""Environment-driven settings.

Everything is read lazily through ``_env`` so tests can monkeypatch the
environment without reloading modules.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class ConfigError(RuntimeError):
    """Raised when an environment setting cannot be interpreted."""


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip() or default


def _env_bool(key: str, default: bool = False) -> bool:
    raw = _env(key)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{key} must be a boolean flag, got {raw!r}.")


def log_level() -> int:
    name = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown LOG_LEVEL {name!r}.")
    return level


def cors_origins() -> List[str]:
    raw = _env("CORS_ALLOW_ORIGINS", "*") or "*"
    return [o.strip() for o in raw.split(",") if o.strip()]


def trace_enabled() -> bool:
    return _env_bool("CHART_TRACE", False)


def trace_level() -> int:
    """Level at which engine trace events are logged when no hook is injected."""
    return logging.INFO if trace_enabled() else logging.DEBUG
