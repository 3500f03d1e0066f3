# Overview: Request and role decorators for API routes.

from functools import wraps

from flask import current_app, jsonify, request

from .context import RequestContext
from .errors import BackendError, error_response
from .services import profile_service, session_service


def require_auth(f):
    """
    Resolve identity and tenant, then call the route with `ctx`.

    The wrapped function receives a RequestContext keyword argument holding
    the identity, its profile and therefore the organization id every query
    must be scoped by.

    Returns:
    - 401 if there is no live session
    - 404 if the identity has no profile (tenant link missing)
    - 400 with the provider's message if the profile lookup itself failed
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity = session_service.resolve_session(request)
        if identity is None:
            return jsonify({"error": "Unauthorized"}), 401

        try:
            profile = profile_service.resolve_profile(identity.id)
        except BackendError as exc:
            current_app.logger.warning("Profile lookup failed for %s: %s", identity.id, exc.message)
            return error_response(exc)

        if profile is None:
            current_app.logger.warning("Identity %s has no profile (%s %s)", identity.id, request.method, request.path)
            return jsonify({"error": "Profile not found"}), 404

        kwargs["ctx"] = RequestContext(
            identity=identity,
            profile=profile,
            token=session_service.extract_token(request),
        )
        return f(*args, **kwargs)

    return decorated_function


def require_role(*roles):
    """
    Require the caller's profile role to be one of roles.

    Must be applied below @require_auth, which supplies `ctx`.
    """
    allowed = frozenset(roles)

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            ctx = kwargs.get("ctx")
            if ctx is None:
                return jsonify({"error": "Unauthorized"}), 401

            if ctx.role not in allowed:
                current_app.logger.warning(
                    "Role %r denied for %s %s (identity %s)",
                    ctx.profile.role_name, request.method, request.path, ctx.identity.id,
                )
                return jsonify({
                    "error": f"Forbidden: role {ctx.profile.role_name} not allowed",
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
