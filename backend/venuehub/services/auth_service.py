# Overview: Sign-in and sign-out flows on top of the provider.

"""
Authentication flows.

Sign-in succeeds only for identities that have a profile: an identity
without one gets 403 and its freshly created session is discarded again,
so no dashboard-less session is left behind. A provider failure during the
profile lookup is answered with 400 and the provider message, and the
session is discarded the same way.
"""

from flask import current_app

from ..context import UserProfile
from ..errors import AppError, BackendError, Forbidden, ValidationError
from ..providers import AuthSession, get_provider
from . import profile_service


PROFILE_MISSING_MESSAGE = "User profile not found. Please contact administrator."


def sign_in(email, password) -> tuple[AuthSession, UserProfile]:
    if not isinstance(email, str) or not isinstance(password, str) or not email.strip() or not password:
        raise ValidationError("Email and password are required")

    provider = get_provider()
    auth_session = provider.sign_in(email.strip(), password)

    try:
        profile = profile_service.resolve_profile(auth_session.identity.id)
        if profile is None:
            raise Forbidden(PROFILE_MISSING_MESSAGE)
    except AppError:
        current_app.logger.warning(
            "Sign-in for identity %s rejected: no usable profile", auth_session.identity.id
        )
        _discard_session(auth_session.token)
        raise

    return auth_session, profile


def sign_out(token: str | None) -> None:
    if token:
        get_provider().sign_out(token)


def _discard_session(token: str) -> None:
    try:
        get_provider().sign_out(token)
    except BackendError:
        current_app.logger.exception("Failed to discard session after rejected sign-in")
