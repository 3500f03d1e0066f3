# Overview: Flask API routes for super-admin operations; parses input and returns JSON responses.

"""
Super-admin routes: organizations and user onboarding.

Every endpoint requires the super_admin role. Unlike the resource routes,
these work across organizations.
"""

from flask import Blueprint, current_app, jsonify

from ..context import RequestContext
from ..decorators import require_auth, require_role
from ..errors import AppError, error_response, unexpected_response
from ..roles import ADMIN_ROLES
from ..services import onboarding_service, organization_service
from ..validation import get_json_body, pick


admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.post("/onboard-user")
@require_auth
@require_role(*ADMIN_ROLES)
def onboard_user_route(ctx: RequestContext):
    """
    Create an identity and its profile.

    Request body:
    {
        "email": "manager@example.com",
        "password": "Password123!",
        "name": "Mia Manager",
        "organizationId": "...",
        "role": "manager"           (super_admin, owner, manager)
    }

    Returns:
        201: user created
        400: missing/invalid fields, or identity/profile creation failed
        403: caller is not a super admin
        404: organization not found
    """
    try:
        data = get_json_body()
        identity, profile = onboarding_service.onboard_user(
            email=data.get("email"),
            password=data.get("password"),
            name=data.get("name"),
            organization_id=pick(data, "organizationId", "organization_id"),
            role=data.get("role"),
        )
        return jsonify({
            "success": True,
            "message": f"User {identity.email} created successfully with role {profile['role']}",
            "user": {
                "id": identity.id,
                "email": identity.email,
            },
        }), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to onboard user")
        return unexpected_response()


@admin_bp.get("/organizations")
@require_auth
@require_role(*ADMIN_ROLES)
def list_organizations_route(ctx: RequestContext):
    try:
        organizations = organization_service.list_organizations()
        return jsonify({"organizations": organizations, "count": len(organizations)}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list organizations")
        return unexpected_response()


@admin_bp.post("/organizations")
@require_auth
@require_role(*ADMIN_ROLES)
def create_organization_route(ctx: RequestContext):
    """Create a tenant: {"name": "Acme Events"}."""
    try:
        org = organization_service.create_organization(get_json_body().get("name"))
        return jsonify({"organization": org}), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create organization")
        return unexpected_response()
