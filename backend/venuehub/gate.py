"""
Authorization gate for page requests.

`decide` is the whole policy as one pure function of (path, session
present, role). `install_gate` runs it before every page request, resolving
the session and profile first; API and static paths are not pages and
bypass it (API routes authorize themselves via require_auth).

A profile that is missing, unreadable, or carries an unknown role counts
as "no role". Every protected decision fails closed on it.
"""

from __future__ import annotations

from enum import Enum

from flask import Flask, current_app, redirect, request

from .errors import BackendError
from .roles import DASHBOARD_ROLES, Role
from .services import profile_service, session_service


LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
ADMIN_HOME_PATH = "/admin/dashboard"

PUBLIC_PATHS = frozenset({"/", LOGIN_PATH})
ADMIN_PREFIX = "/admin"
DASHBOARD_PREFIX = "/dashboard"

UNGATED_PREFIXES = ("/api", "/static", "/_next/static", "/_next/image")
UNGATED_PATHS = frozenset({"/favicon.ico"})
UNGATED_SUFFIXES = (".png", ".jpg")


class Decision(Enum):
    ALLOW = None
    REDIRECT_LOGIN = LOGIN_PATH
    REDIRECT_DASHBOARD = DASHBOARD_PATH
    REDIRECT_ADMIN = ADMIN_HOME_PATH

    @property
    def location(self) -> str | None:
        return self.value


def is_under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_public(path: str) -> bool:
    return path in PUBLIC_PATHS


def is_protected(path: str) -> bool:
    return is_under(path, ADMIN_PREFIX) or is_under(path, DASHBOARD_PREFIX)


def is_gated(path: str) -> bool:
    """Page paths the gate runs on."""
    if path in UNGATED_PATHS or path.lower().endswith(UNGATED_SUFFIXES):
        return False
    return not any(is_under(path, prefix) for prefix in UNGATED_PREFIXES)


def decide(path: str, has_session: bool, role: Role | None) -> Decision:
    if not has_session:
        return Decision.ALLOW if is_public(path) else Decision.REDIRECT_LOGIN

    if is_public(path):
        if role is None:
            # Stay on the public page; redirecting would bounce back to /login
            return Decision.ALLOW
        if role is Role.SUPER_ADMIN:
            return Decision.REDIRECT_ADMIN
        return Decision.REDIRECT_DASHBOARD

    if is_under(path, ADMIN_PREFIX):
        return Decision.ALLOW if role is Role.SUPER_ADMIN else Decision.REDIRECT_DASHBOARD

    if is_under(path, DASHBOARD_PREFIX):
        return Decision.ALLOW if role in DASHBOARD_ROLES else Decision.REDIRECT_LOGIN

    return Decision.ALLOW


def _resolve_role(identity_id: str) -> Role | None:
    try:
        profile = profile_service.resolve_profile(identity_id)
    except BackendError as exc:
        current_app.logger.warning("Profile lookup failed in gate for %s: %s", identity_id, exc.message)
        return None
    except Exception:
        current_app.logger.exception("Unexpected profile lookup failure in gate for %s", identity_id)
        return None
    return profile.role if profile else None


def install_gate(app: Flask) -> None:
    @app.before_request
    def authorization_gate():
        path = request.path
        if not is_gated(path):
            return None

        identity = session_service.resolve_session(request)
        role = None
        if identity is not None and (is_public(path) or is_protected(path)):
            role = _resolve_role(identity.id)

        decision = decide(path, identity is not None, role)
        if decision is Decision.ALLOW:
            return None

        current_app.logger.info(
            "Gate redirect %s -> %s (session=%s, role=%s)",
            path, decision.location, identity is not None, role.value if role else None,
        )
        return redirect(decision.location)
