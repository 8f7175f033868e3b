"""
Gateway header authentication.

The API gateway authenticates the caller and forwards who they are in these
headers:

- X-User-Id     user UUID
- X-Username    login id
- X-User-Name   real name (URL-encoded)
- X-Slack-Id    Slack user id
- X-User-Roles  comma-separated roles

`LoginMiddleware` turns them into an `AuthenticatedUser` for the duration of
the request (`auth.context` and `request.state.user`). When X-User-Id or
X-Username is missing the request simply continues unauthenticated; routes
that need a user reject it through `auth.dependencies`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import unquote_plus
from uuid import UUID

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from . import context
from .principal import AuthenticatedUser

HEADER_USER_ID = "X-User-Id"
HEADER_USERNAME = "X-Username"
HEADER_USER_NAME = "X-User-Name"
HEADER_SLACK_ID = "X-Slack-Id"
HEADER_ROLES = "X-User-Roles"

logger = logging.getLogger(__name__)


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def authenticate_headers(headers: Mapping[str, str]) -> AuthenticatedUser | None:
    """
    Build the user from gateway headers, or None when they do not identify one.
    """
    user_id = headers.get(HEADER_USER_ID)
    username = headers.get(HEADER_USERNAME)
    if not _has_text(user_id) or not _has_text(username):
        return None

    try:
        parsed_id = UUID(user_id.strip())
    except ValueError:
        logger.warning("invalid_user_id_header value=%r", user_id)
        return None

    raw_name = headers.get(HEADER_USER_NAME)
    name = None if raw_name is None else unquote_plus(raw_name, encoding="utf-8")

    return AuthenticatedUser.of(
        parsed_id,
        username,
        name,
        headers.get(HEADER_SLACK_ID),
        headers.get(HEADER_ROLES),
    )


class LoginMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") not in {"http", "websocket"}:
            await self.app(scope, receive, send)
            return

        user = authenticate_headers(Headers(scope=scope))
        if user is not None:
            scope.setdefault("state", {})["user"] = user

        token = context.set_authentication(user)
        try:
            await self.app(scope, receive, send)
        finally:
            # Requests on the same event loop must not inherit the previous user.
            context.reset_authentication(token)
