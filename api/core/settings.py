"""
Environment-driven settings.

Every value is read on call so tests can patch `os.environ` freely.
"""

from __future__ import annotations

import logging
import os

DEFAULT_APP_NAME = "project-interface"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_list(name: str, default: tuple[str, ...]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def app_name() -> str:
    return _env_str("APP_NAME", DEFAULT_APP_NAME)


def log_level() -> int:
    name = _env_str("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names.
    return level if isinstance(level, int) else logging.INFO


def cors_allow_origins() -> list[str]:
    return _env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def database_url() -> str | None:
    return os.environ.get("DATABASE_URL", "").strip() or None
