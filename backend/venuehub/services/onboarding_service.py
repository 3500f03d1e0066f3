# Overview: Admin onboarding; creates an identity and its profile as one logical operation.

"""
User onboarding (super admin only, or the bootstrap CLI).

The identity and the profile are two separate writes against the provider
and are not transactional. If the profile insert fails, the identity
created just before it is deleted again. That rollback is best-effort: a
failure to delete is logged and the original error is still the one
reported.

Validation happens before any write, so a rejected request (unknown role,
weak password, missing organization) never creates an identity.
"""

from __future__ import annotations

from flask import current_app

from ..errors import BackendError, ValidationError
from ..passwords import validate_password_strength
from ..providers import Identity, get_provider
from ..roles import ROLE_VALUES, Role
from ..validation import parse_email, parse_text, require_fields
from . import organization_service


def onboard_user(email, password, name, organization_id, role) -> tuple[Identity, dict]:
    require_fields({
        "email": email,
        "password": password,
        "name": name,
        "organizationId": organization_id,
        "role": role,
    })

    parsed_role = Role.parse(role)
    if parsed_role is None:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(ROLE_VALUES)}")

    email = parse_email(email)
    name = parse_text(name, "name")
    if not isinstance(password, str):
        raise ValidationError("password must be a string")
    validate_password_strength(password)

    org = organization_service.get_organization(organization_id)

    provider = get_provider()
    try:
        identity = provider.create_identity(email, password)
    except BackendError as exc:
        raise BackendError(f"Failed to create user: {exc.message}") from exc

    try:
        profile = provider.create_profile({
            "id": identity.id,
            "organization_id": org["id"],
            "role": parsed_role.value,
            "name": name,
            "email": email,
        })
    except BackendError as exc:
        current_app.logger.error("Profile creation failed for identity %s: %s", identity.id, exc.message)
        _rollback_identity(identity.id)
        raise BackendError(f"Failed to create user profile: {exc.message}") from exc
    except Exception:
        current_app.logger.exception("Profile creation failed for identity %s", identity.id)
        _rollback_identity(identity.id)
        raise

    current_app.logger.info(
        "Onboarded %s as %s in organization %s", email, parsed_role.value, org["id"]
    )
    return identity, profile


def _rollback_identity(identity_id: str) -> None:
    try:
        get_provider().delete_identity(identity_id)
    except Exception:
        current_app.logger.exception("Failed to clean up identity %s after profile failure", identity_id)
