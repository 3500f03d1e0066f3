# Overview: Pytest coverage for the page authorization gate.

"""
Authorization gate tests.

The decision table is checked directly against `decide`, then the
before_request hook is exercised over HTTP with real sessions.
"""

from urllib.parse import urlparse

import pytest

from venuehub.errors import BackendError
from venuehub.gate import Decision, decide, is_gated
from venuehub.roles import Role
from venuehub.providers import get_provider

from conftest import auth_headers, get_auth_token, make_user


def location_path(resp) -> str:
    return urlparse(resp.headers["Location"]).path


# =============================================================================
# DECISION TABLE (pure)
# =============================================================================


class TestDecide:

    @pytest.mark.parametrize("path", ["/", "/login"])
    def test_public_without_session_allowed(self, path):
        assert decide(path, False, None) is Decision.ALLOW

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/venues", "/admin", "/admin/users", "/reports"])
    def test_non_public_without_session_redirects_login(self, path):
        assert decide(path, False, None) is Decision.REDIRECT_LOGIN

    @pytest.mark.parametrize("path", ["/", "/login"])
    def test_public_with_super_admin_goes_to_admin_home(self, path):
        assert decide(path, True, Role.SUPER_ADMIN) is Decision.REDIRECT_ADMIN

    @pytest.mark.parametrize("role", [Role.OWNER, Role.MANAGER])
    def test_public_with_tenant_role_goes_to_dashboard(self, role):
        assert decide("/login", True, role) is Decision.REDIRECT_DASHBOARD

    def test_public_with_session_but_no_profile_allowed(self):
        assert decide("/login", True, None) is Decision.ALLOW

    @pytest.mark.parametrize("role", [Role.OWNER, Role.MANAGER, None])
    def test_admin_without_super_admin_redirects_dashboard(self, role):
        assert decide("/admin/organizations", True, role) is Decision.REDIRECT_DASHBOARD
        assert decide("/admin", True, role) is Decision.REDIRECT_DASHBOARD

    def test_admin_with_super_admin_allowed(self):
        assert decide("/admin/dashboard", True, Role.SUPER_ADMIN) is Decision.ALLOW

    @pytest.mark.parametrize("role", [Role.OWNER, Role.MANAGER, Role.SUPER_ADMIN])
    def test_dashboard_with_dashboard_role_allowed(self, role):
        assert decide("/dashboard", True, role) is Decision.ALLOW
        assert decide("/dashboard/bookings", True, role) is Decision.ALLOW

    def test_dashboard_without_profile_redirects_login(self):
        assert decide("/dashboard/venues", True, None) is Decision.REDIRECT_LOGIN

    def test_prefix_match_respects_segment_boundary(self):
        """/administrator is not under /admin."""
        assert decide("/administrator", True, Role.MANAGER) is Decision.ALLOW
        assert decide("/dashboards", True, None) is Decision.ALLOW

    def test_other_page_with_session_allowed(self):
        assert decide("/reports", True, None) is Decision.ALLOW

    def test_redirect_locations(self):
        assert Decision.REDIRECT_LOGIN.location == "/login"
        assert Decision.REDIRECT_DASHBOARD.location == "/dashboard"
        assert Decision.REDIRECT_ADMIN.location == "/admin/dashboard"
        assert Decision.ALLOW.location is None


class TestGatedPaths:

    @pytest.mark.parametrize("path", [
        "/api/venues",
        "/api",
        "/static/app.js",
        "/_next/static/chunk.js",
        "/_next/image",
        "/favicon.ico",
        "/logo.png",
        "/photos/hall.JPG",
    ])
    def test_assets_and_api_bypass_gate(self, path):
        assert is_gated(path) is False

    @pytest.mark.parametrize("path", ["/", "/login", "/dashboard", "/admin/users", "/apiary"])
    def test_pages_are_gated(self, path):
        assert is_gated(path) is True


# =============================================================================
# GATE OVER HTTP
# =============================================================================


class TestGateHook:

    def test_admin_page_with_manager_redirects_dashboard(self, client, manager_headers):
        resp = client.get("/admin/dashboard", headers=manager_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/dashboard"

    def test_admin_page_with_super_admin_reaches_page(self, client, admin_headers):
        resp = client.get("/admin/dashboard", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json == {"page": "/admin/dashboard"}

    def test_dashboard_with_manager_reaches_page(self, client, manager_headers):
        resp = client.get("/dashboard/bookings", headers=manager_headers)
        assert resp.status_code == 200

    def test_dashboard_without_session_redirects_login(self, client, db_session):
        resp = client.get("/dashboard")
        assert resp.status_code == 302
        assert location_path(resp) == "/login"

    def test_dashboard_without_profile_redirects_login(self, client, no_profile_headers):
        resp = client.get("/dashboard", headers=no_profile_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/login"

    def test_login_without_profile_does_not_loop(self, client, no_profile_headers):
        resp = client.get("/login", headers=no_profile_headers)
        assert resp.status_code == 200

    def test_login_with_super_admin_redirects_admin_home(self, client, admin_headers):
        resp = client.get("/login", headers=admin_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/admin/dashboard"

    def test_home_with_owner_redirects_dashboard(self, client, owner_headers):
        resp = client.get("/", headers=owner_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/dashboard"

    def test_login_without_session_allowed(self, client, db_session):
        resp = client.get("/login")
        assert resp.status_code == 200
        assert resp.json == {"page": "/login"}

    def test_unknown_page_without_session_redirects_login(self, client, db_session):
        resp = client.get("/reports")
        assert resp.status_code == 302
        assert location_path(resp) == "/login"

    def test_session_cookie_is_honoured(self, client, owner_a):
        client.post("/api/auth/sign-in", json={"email": owner_a.email, "password": "Password123!"})
        resp = client.get("/dashboard")
        assert resp.status_code == 200

    def test_invalid_token_treated_as_no_session(self, client, db_session):
        resp = client.get("/dashboard", headers={"Authorization": "Bearer not-a-real-token"})
        assert resp.status_code == 302
        assert location_path(resp) == "/login"

    def test_api_paths_are_not_redirected(self, client, db_session):
        resp = client.get("/api/venues")
        assert resp.status_code == 401
        assert "Location" not in resp.headers

    @pytest.mark.parametrize("error", [
        BackendError("profiles table unavailable"),
        RuntimeError("decode failure"),
        ValueError("Expecting value: line 1 column 1"),
    ])
    def test_profile_fetch_failure_fails_closed(self, client, manager_headers, monkeypatch, error):
        def boom(identity_id):
            raise error

        monkeypatch.setattr(get_provider(), "get_profile", boom)

        resp = client.get("/dashboard", headers=manager_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/login"

        resp = client.get("/admin", headers=manager_headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/dashboard"

    def test_unknown_role_treated_as_no_role(self, client, db_session, org_a):
        user = make_user(db_session, "viewer@acme.com", org_a, "viewer")
        headers = auth_headers(get_auth_token(user.email))

        resp = client.get("/dashboard", headers=headers)
        assert resp.status_code == 302
        assert location_path(resp) == "/login"
