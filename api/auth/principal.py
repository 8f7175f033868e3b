"""
Authenticated user model.

Built from the identity headers the API gateway forwards (see `auth/login.py`),
so the application can treat the caller as logged in without handling
passwords itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

DEFAULT_ROLE = "ROLE_USER"


@dataclass(frozen=True)
class AuthenticatedUser:
    """
    id       user UUID
    username login id
    name     real name
    slack_id Slack user id
    roles    comma-separated roles, e.g. "ROLE_ADMIN,ROLE_USER"
    """

    id: UUID
    username: str
    name: str | None = None
    slack_id: str | None = None
    roles: str | None = None

    @classmethod
    def of(
        cls,
        id: UUID,
        username: str,
        name: str | None,
        slack_id: str | None,
        roles: str | None,
    ) -> AuthenticatedUser:
        return cls(id=id, username=username, name=name, slack_id=slack_id, roles=roles)

    @property
    def authorities(self) -> list[str]:
        """
        Roles split on ","; ROLE_USER when no roles were given.
        """
        if not (self.roles or "").strip():
            return [DEFAULT_ROLE]
        return [role.strip() for role in self.roles.split(",") if role.strip()]

    @property
    def password(self) -> str:
        # No password-based authentication.
        return ""

    def has_any_role(self, *roles: str) -> bool:
        granted = set(self.authorities)
        return any(role in granted for role in roles)
