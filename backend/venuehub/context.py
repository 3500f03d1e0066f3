"""
Request-scoped identity and tenant context.

Built once per request by require_auth and passed to the handler as `ctx`.
Nothing here is cached between requests.
"""

from __future__ import annotations

from dataclasses import dataclass

from .providers.base import Identity
from .roles import Role


@dataclass(frozen=True)
class UserProfile:
    id: str
    organization_id: str | None
    role_name: str | None
    name: str | None = None
    email: str | None = None

    @property
    def role(self) -> Role | None:
        return Role.parse(self.role_name)

    @classmethod
    def from_row(cls, row: dict) -> UserProfile:
        return cls(
            id=str(row["id"]),
            organization_id=str(row["organization_id"]) if row.get("organization_id") else None,
            role_name=row.get("role"),
            name=row.get("name"),
            email=row.get("email"),
        )


@dataclass(frozen=True)
class RequestContext:
    identity: Identity
    profile: UserProfile
    token: str | None = None

    @property
    def org_id(self) -> str | None:
        return self.profile.organization_id

    @property
    def role(self) -> Role | None:
        return self.profile.role

    def to_user_dict(self) -> dict:
        return user_payload(self.identity, self.profile)


def user_payload(identity: Identity, profile: UserProfile) -> dict:
    """User shape returned by sign-in and /api/auth/me."""
    return {
        "id": identity.id,
        "email": identity.email,
        "organizationId": profile.organization_id,
        "role": profile.role_name,
        "name": profile.name,
    }
