# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

"""
Authentication API routes.

The session token is handed to the browser as an HTTP-only cookie and is
never part of a response body. API clients may send the same token as
`Authorization: Bearer <token>`.
"""

from datetime import timedelta

from flask import Blueprint, current_app, jsonify, request

from ..context import RequestContext, user_payload
from ..decorators import require_auth
from ..errors import AppError, error_response, unexpected_response
from ..services import auth_service, session_service
from ..time_utils import as_naive_utc, utcnow


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _cookie_max_age(expires_at) -> int:
    lifetime = timedelta(hours=current_app.config["SESSION_LIFETIME_HOURS"])
    if expires_at is not None:
        lifetime = min(lifetime, as_naive_utc(expires_at) - utcnow())
    return max(int(lifetime.total_seconds()), 0)


@auth_bp.post("/sign-in")
def sign_in_route():
    """
    Authenticate with email and password.

    Request body: {"email": str, "password": str}

    Returns:
        200: {"success": true, "user": {id, email, organizationId, role, name}}
        400: missing fields
        401: invalid credentials
        403: identity has no profile
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        auth_session, profile = auth_service.sign_in(data.get("email"), data.get("password"))

        response = jsonify({
            "success": True,
            "user": user_payload(auth_session.identity, profile),
        })
        response.set_cookie(
            current_app.config["AUTH_COOKIE_NAME"],
            auth_session.token,
            max_age=_cookie_max_age(auth_session.expires_at),
            httponly=True,
            secure=current_app.config["AUTH_COOKIE_SECURE"],
            samesite="Lax",
        )
        return response, 200

    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to sign in user")
        return unexpected_response()


@auth_bp.post("/sign-out")
def sign_out_route():
    """Revoke the current session (if any) and clear the cookie."""
    try:
        auth_service.sign_out(session_service.extract_token(request))
    except AppError as e:
        current_app.logger.warning("Sign out failed: %s", e.message)
        return jsonify({"error": "Failed to sign out"}), 500
    except Exception:
        current_app.logger.exception("Failed to sign out user")
        return jsonify({"error": "Failed to sign out"}), 500

    response = jsonify({"success": True, "message": "Signed out successfully"})
    response.delete_cookie(current_app.config["AUTH_COOKIE_NAME"])
    return response, 200


@auth_bp.post("/sign-up")
def sign_up_route():
    """
    Public sign-up is disabled.

    Users are created by a super admin via POST /api/admin/onboard-user,
    or with the CLI: flask users create
    """
    return jsonify({
        "error": "Public signup is disabled. Please contact administrator for onboarding."
    }), 403


@auth_bp.get("/me")
@require_auth
def me_route(ctx: RequestContext):
    """Current user with role and organization, for the dashboard shell."""
    return jsonify({"user": ctx.to_user_dict()}), 200
