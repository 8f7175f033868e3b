"""
Security wiring and helpers.

The service is stateless: no sessions, no CSRF tokens, and every route is
reachable by default. Authentication comes from gateway headers
(`LoginMiddleware`); routes opt into protection with `auth.dependencies`.
Both "not authenticated" and "not allowed" are answered with 401.
"""

from __future__ import annotations

from typing import Any

import jwt
from fastapi import FastAPI
from starlette.datastructures import Headers
from starlette.types import Scope

from core import settings

from .login import LoginMiddleware


class AuthSecurityError(RuntimeError):
    pass


def install_security(app: FastAPI) -> None:
    app.add_middleware(LoginMiddleware)


def extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        return None

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        return None
    return token


def decode_bearer_claims(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Bearer token is empty.")

    try:
        return jwt.decode(
            raw,
            settings.jwt_secret(),
            algorithms=[settings.jwt_algorithm()],
            options={"verify_aud": False},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid bearer token.") from exc


def resolve_username(scope: Scope) -> str | None:
    """
    Account name for the request logging context.

    The `preferred_username` claim of a valid bearer JWT wins; otherwise the
    gateway-authenticated user, otherwise None.
    """
    token = extract_bearer_token(Headers(scope=scope).get("authorization"))
    if token is not None:
        try:
            claims = decode_bearer_claims(token)
        except AuthSecurityError:
            claims = {}
        preferred = claims.get("preferred_username")
        if isinstance(preferred, str) and preferred.strip():
            return preferred

    user = scope.get("state", {}).get("user")
    return getattr(user, "username", None)
