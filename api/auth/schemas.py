"""
Auth API schemas (response models).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field

from .principal import AuthenticatedUser


class UserResponse(BaseModel):
    id: UUID
    username: str
    name: str | None = None
    slack_id: str | None = None
    authorities: list[str] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: AuthenticatedUser) -> UserResponse:
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            slack_id=user.slack_id,
            authorities=user.authorities,
        )
