"""
ASGI middleware that owns the request logging context.

For every HTTP request a fresh request id (UUID4) and the requesting account
are stored in `core.context`, so every log line written while the request is
handled carries them. Unhandled errors are logged here, while the context is
still populated, and re-raised. The context is always cleared afterwards.

The account is looked up through an injected `username_resolver`; `core`
stays unaware of how authentication works.
"""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from starlette.datastructures import URL
from starlette.types import ASGIApp, Receive, Scope, Send

from . import context
from .log_manager import LogManager, log_manager

DEFAULT_USERNAME = "SYSTEM"

UsernameResolver = Callable[[Scope], str | None]


def _no_username(_: Scope) -> str | None:
    return None


class RequestContextMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        username_resolver: UsernameResolver | None = None,
        manager: LogManager | None = None,
    ) -> None:
        self.app = app
        self.username_resolver = username_resolver or _no_username
        self.log_manager = manager or log_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        context.set_request_id(str(uuid4()))
        context.set_request_username(self.username_resolver(scope) or DEFAULT_USERNAME)
        context.set_current_request(context.RequestInfo(method=scope["method"], url=str(URL(scope=scope))))

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            self.log_manager.log_exception(exc)
            raise
        finally:
            context.clear()
