"""
Per-request holder for the authenticated user.
"""

from __future__ import annotations

from contextvars import ContextVar, Token

from .principal import AuthenticatedUser

_authentication: ContextVar[AuthenticatedUser | None] = ContextVar("authentication", default=None)


def get_authentication() -> AuthenticatedUser | None:
    return _authentication.get()


def set_authentication(user: AuthenticatedUser | None) -> Token[AuthenticatedUser | None]:
    """
    Must be paired with reset_authentication() in a finally block.
    """
    return _authentication.set(user)


def reset_authentication(token: Token[AuthenticatedUser | None]) -> None:
    _authentication.reset(token)


def clear() -> None:
    _authentication.set(None)
