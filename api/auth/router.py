"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.log_route import LoggingRoute

from . import dependencies, schemas
from .principal import AuthenticatedUser

router = APIRouter(prefix="/auth", route_class=LoggingRoute)


@router.get("/me", response_model=schemas.UserResponse)
async def me(
    current_user: AuthenticatedUser = Depends(dependencies.get_current_user),
) -> schemas.UserResponse:
    """
    The caller as seen through the gateway headers.
    """
    return schemas.UserResponse.from_user(current_user)
