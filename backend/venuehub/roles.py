from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """
    Closed set of profile roles.

    SUPER_ADMIN works across organizations (admin pages, onboarding).
    OWNER and MANAGER are scoped to their own organization's dashboard.
    """
    SUPER_ADMIN = "super_admin"
    OWNER = "owner"
    MANAGER = "manager"

    @classmethod
    def parse(cls, value) -> Role | None:
        """Return the matching Role, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


ROLE_VALUES = tuple(role.value for role in Role)

DASHBOARD_ROLES = frozenset({Role.OWNER, Role.MANAGER, Role.SUPER_ADMIN})
ADMIN_ROLES = frozenset({Role.SUPER_ADMIN})
