# Overview: Pytest coverage for super-admin onboarding and organization management.

"""
Onboarding tests.

Verifies:
- Only super admins may onboard users or manage organizations (403 otherwise)
- Validation failures never create an identity
- A failed profile insert deletes the identity again
- A failed cleanup is logged and does not change the response
"""

import logging

import pytest

from venuehub.errors import BackendError
from venuehub.models import Organization, Profile, User
from venuehub.providers import get_provider

from conftest import PASSWORD


def onboard_body(org_id, **overrides):
    body = {
        "email": "new.manager@acme.com",
        "password": "Sup3r$ecret",
        "name": "Nina New",
        "organizationId": org_id,
        "role": "manager",
    }
    body.update(overrides)
    return body


def user_by_email(db_session, email):
    return db_session.query(User).filter_by(email=email).first()


class TestOnboardUser:

    def test_super_admin_onboards_manager(self, client, admin_headers, db_session, org_b, provider):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers, json=onboard_body(org_b.id))

        assert resp.status_code == 201
        assert resp.json["success"] is True
        assert resp.json["user"]["email"] == "new.manager@acme.com"
        assert "manager" in resp.json["message"]

        profile = db_session.get(Profile, resp.json["user"]["id"])
        assert profile.organization_id == org_b.id
        assert profile.role == "manager"
        assert profile.name == "Nina New"

        # The new user can sign in straight away
        session = provider.sign_in("new.manager@acme.com", "Sup3r$ecret")
        assert session.identity.id == resp.json["user"]["id"]

    @pytest.mark.parametrize("headers_fixture", ["owner_headers", "manager_headers"])
    def test_non_super_admin_forbidden(self, client, db_session, org_a, request, headers_fixture):
        headers = request.getfixturevalue(headers_fixture)
        resp = client.post("/api/admin/onboard-user", headers=headers, json=onboard_body(org_a.id))

        assert resp.status_code == 403
        assert resp.json["error"].startswith("Forbidden: role")
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_requires_session(self, client, db_session):
        resp = client.post("/api/admin/onboard-user", json={})
        assert resp.status_code == 401

    def test_invalid_role_creates_no_identity(self, client, admin_headers, db_session, org_a):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers, json=onboard_body(org_a.id, role="admin"))

        assert resp.status_code == 400
        assert resp.json == {"error": "Invalid role. Must be one of: super_admin, owner, manager"}
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_missing_fields(self, client, admin_headers, org_a):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers, json={
            "email": "x@acme.com",
            "organizationId": org_a.id,
        })
        assert resp.status_code == 400
        assert resp.json == {"error": "Missing required fields: password, name, role"}

    def test_weak_password(self, client, admin_headers, db_session, org_a):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers,
                           json=onboard_body(org_a.id, password="short"))

        assert resp.status_code == 400
        assert resp.json == {"error": "Password must be at least 8 characters long"}
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_unknown_organization_404(self, client, admin_headers, db_session):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers,
                           json=onboard_body("00000000-0000-0000-0000-000000000000"))

        assert resp.status_code == 404
        assert resp.json == {"error": "Organization not found"}
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_duplicate_email(self, client, admin_headers, owner_a, org_a):
        resp = client.post("/api/admin/onboard-user", headers=admin_headers,
                           json=onboard_body(org_a.id, email="OWNER_A@acme.com"))

        assert resp.status_code == 400
        assert resp.json == {
            "error": "Failed to create user: A user with this email address has already been registered"
        }

    def test_profile_failure_rolls_back_identity(self, client, admin_headers, db_session, org_a, monkeypatch):
        def failing_profile(values):
            raise BackendError("insert violates row-level security policy")

        monkeypatch.setattr(get_provider(), "create_profile", failing_profile)

        resp = client.post("/api/admin/onboard-user", headers=admin_headers, json=onboard_body(org_a.id))

        assert resp.status_code == 400
        assert resp.json == {
            "error": "Failed to create user profile: insert violates row-level security policy"
        }
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_unexpected_profile_failure_rolls_back_identity(self, client, admin_headers, db_session, org_a, monkeypatch):
        def broken_profile(values):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(get_provider(), "create_profile", broken_profile)

        resp = client.post("/api/admin/onboard-user", headers=admin_headers, json=onboard_body(org_a.id))

        assert resp.status_code == 500
        assert resp.json == {"error": "An unexpected error occurred"}
        assert user_by_email(db_session, "new.manager@acme.com") is None

    def test_rollback_failure_is_logged(self, client, admin_headers, db_session, org_a, monkeypatch, caplog):
        provider = get_provider()

        def failing_profile(values):
            raise BackendError("insert failed")

        def failing_delete(identity_id):
            raise BackendError("delete failed")

        monkeypatch.setattr(provider, "create_profile", failing_profile)
        monkeypatch.setattr(provider, "delete_identity", failing_delete)

        with caplog.at_level(logging.ERROR):
            resp = client.post("/api/admin/onboard-user", headers=admin_headers, json=onboard_body(org_a.id))

        # The original failure is still the one reported
        assert resp.status_code == 400
        assert resp.json == {"error": "Failed to create user profile: insert failed"}
        assert "Failed to clean up identity" in caplog.text

        # Cleanup failed, so the orphan identity remains
        assert user_by_email(db_session, "new.manager@acme.com") is not None


class TestOrganizations:

    def test_list_organizations(self, client, admin_headers, org_a, org_b):
        resp = client.get("/api/admin/organizations", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json["count"] == 2
        assert [org["name"] for org in resp.json["organizations"]] == [
            "Org A - Acme Events",
            "Org B - Beta Venues",
        ]

    def test_create_organization(self, client, admin_headers, db_session):
        resp = client.post("/api/admin/organizations", headers=admin_headers, json={"name": "  Gamma Halls "})

        assert resp.status_code == 201
        assert resp.json["organization"]["name"] == "Gamma Halls"
        assert db_session.get(Organization, resp.json["organization"]["id"]) is not None

    def test_create_organization_requires_name(self, client, admin_headers):
        resp = client.post("/api/admin/organizations", headers=admin_headers, json={})
        assert resp.status_code == 400
        assert resp.json == {"error": "Missing required fields: name"}

    def test_owner_cannot_list_organizations(self, client, owner_headers):
        resp = client.get("/api/admin/organizations", headers=owner_headers)
        assert resp.status_code == 403
        assert resp.json == {"error": "Forbidden: role owner not allowed"}


class TestSignInAfterOnboarding:

    def test_onboarded_owner_reaches_dashboard(self, client, admin_headers, org_a):
        client.post("/api/admin/onboard-user", headers=admin_headers,
                    json=onboard_body(org_a.id, email="fresh@acme.com", role="owner"))

        resp = client.post("/api/auth/sign-in", json={"email": "fresh@acme.com", "password": "Sup3r$ecret"})
        assert resp.status_code == 200
        assert resp.json["user"]["role"] == "owner"
        assert resp.json["user"]["organizationId"] == org_a.id

        assert client.get("/dashboard").status_code == 200
        assert client.get("/admin").status_code == 302

    def test_fixture_password_still_valid(self, provider, owner_a):
        assert provider.sign_in(owner_a.email, PASSWORD).identity.id == owner_a.id
