"""
Root logging setup.

Every record gets `request_id` and `username` attributes from the request
context so the format string can print them.
"""

from __future__ import annotations

import logging

from . import context, settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] [%(username)s] %(name)s - %(message)s"
_MISSING = "-"


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = context.get_request_id() or _MISSING
        record.username = context.get_request_username() or _MISSING
        return True


def configure_logging(level: int | None = None) -> None:
    root = logging.getLogger()
    root.setLevel(level if level is not None else settings.log_level())

    # Idempotent: app factory may run more than once per process (tests).
    for handler in root.handlers:
        if getattr(handler, "_request_context", False):
            return None

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(ContextFilter())
    handler._request_context = True  # type: ignore[attr-defined]
    root.addHandler(handler)
