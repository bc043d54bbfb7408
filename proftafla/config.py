"""
Runtime configuration.

Values come from the environment, optionally preloaded from a .env file
in the working directory:

    REDIS_URL           cache store URL        (default redis://localhost:6379/0)
    REDIS_EXPIRE        cache TTL in seconds   (default 3600)
    PROFTAFLA_TIMEOUT   upstream timeout in s  (default 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_TTL_SECONDS = 3600
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    redis_url: str
    ttl_seconds: int
    timeout: float


def _positive_int(raw: str, name: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _positive_float(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings once at startup.

    Tests pass an explicit mapping; otherwise .env is loaded into os.environ
    (without overriding variables that are already set) and that is used.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    redis_url = (environ.get("REDIS_URL") or "").strip() or DEFAULT_REDIS_URL
    ttl = _positive_int(environ.get("REDIS_EXPIRE") or str(DEFAULT_TTL_SECONDS), "REDIS_EXPIRE")
    timeout = _positive_float(environ.get("PROFTAFLA_TIMEOUT") or str(DEFAULT_TIMEOUT_SECONDS), "PROFTAFLA_TIMEOUT")

    return Settings(redis_url=redis_url, ttl_seconds=ttl, timeout=timeout)
