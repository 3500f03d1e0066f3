# Overview: Session resolution; turns request credentials into an Identity or None.

"""
Session resolver.

Credentials are read from the auth cookie or an `Authorization: Bearer`
header, then exchanged with the provider for an Identity. A missing,
expired, revoked or unreadable session is a normal outcome and yields None.
Provider failures are logged and also yield None, so callers fail closed.
"""

from flask import Request, current_app

from ..errors import BackendError
from ..providers import Identity, get_provider


def extract_token(req: Request) -> str | None:
    auth_header = req.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token

    token = req.cookies.get(current_app.config["AUTH_COOKIE_NAME"])
    return token or None


def resolve_session(req: Request) -> Identity | None:
    token = extract_token(req)
    if not token:
        return None

    try:
        return get_provider().get_identity(token)
    except BackendError as exc:
        current_app.logger.warning("Session lookup failed, treating as signed out: %s", exc.message)
        return None
    except Exception:
        current_app.logger.exception("Unexpected session lookup failure, treating as signed out")
        return None
