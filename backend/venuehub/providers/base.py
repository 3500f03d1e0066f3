"""
Backend provider interface.

A provider is the external collaborator every data operation is delegated
to: an auth service (sign-in, sign-out, session lookup, identity
administration) plus a relational store holding organizations, profiles and
tenant-owned resources.

Rows cross this boundary as plain dicts with snake_case keys, the same shape
for every provider. Resource reads and updates take the organization id as a
required argument so no call site can forget tenant scoping.

Error contract:
- "not found" is a normal outcome and returns None
- bad sign-in credentials raise InvalidCredentials
- transport or backend failures raise BackendError
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


RESOURCES = ("venues", "bookings", "payments", "invoices")


@dataclass(frozen=True)
class Identity:
    """Authenticated principal as reported by the auth service."""
    id: str
    email: str


@dataclass(frozen=True)
class AuthSession:
    identity: Identity
    token: str
    expires_at: datetime | None = None


class BackendProvider(ABC):
    name = "base"

    # -- auth ---------------------------------------------------------------

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    @abstractmethod
    def sign_out(self, token: str) -> None:
        ...

    @abstractmethod
    def get_identity(self, token: str) -> Identity | None:
        """Identity for a session token; None when the token is not a live session."""

    @abstractmethod
    def get_identity_by_id(self, identity_id: str) -> Identity | None:
        ...

    @abstractmethod
    def create_identity(self, email: str, password: str) -> Identity:
        ...

    @abstractmethod
    def delete_identity(self, identity_id: str) -> None:
        ...

    # -- tenancy ------------------------------------------------------------

    @abstractmethod
    def get_profile(self, identity_id: str) -> dict | None:
        ...

    @abstractmethod
    def create_profile(self, values: dict) -> dict:
        ...

    @abstractmethod
    def get_organization(self, organization_id: str) -> dict | None:
        ...

    @abstractmethod
    def list_organizations(self) -> list[dict]:
        ...

    @abstractmethod
    def create_organization(self, values: dict) -> dict:
        ...

    # -- tenant-owned resources ---------------------------------------------

    @abstractmethod
    def list_records(self, resource: str, organization_id: str) -> list[dict]:
        """All rows of a resource for one organization, newest first, with embeds."""

    @abstractmethod
    def get_record(self, resource: str, organization_id: str, record_id: str) -> dict | None:
        ...

    @abstractmethod
    def create_record(self, resource: str, values: dict) -> dict:
        """Insert a row. values must carry organization_id."""

    @abstractmethod
    def update_record(self, resource: str, organization_id: str, record_id: str, changes: dict) -> dict | None:
        ...

    @abstractmethod
    def health(self) -> dict:
        ...

    @staticmethod
    def check_resource(resource: str) -> None:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource}")
