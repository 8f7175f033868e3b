"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status

from . import context
from .principal import AuthenticatedUser


async def get_optional_user() -> AuthenticatedUser | None:
    return context.get_authentication()


async def get_current_user(
    user: AuthenticatedUser | None = Depends(get_optional_user),
) -> AuthenticatedUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
        )
    return user


def require_roles(*roles: str) -> Callable[..., Awaitable[AuthenticatedUser]]:
    """
    Dependency factory: the current user must hold at least one of `roles`.

    Access denied is reported as 401, same as missing authentication.
    """

    async def dependency(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if roles and not user.has_any_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Access denied.",
            )
        return user

    return dependency
