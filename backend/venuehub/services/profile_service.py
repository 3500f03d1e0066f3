# Overview: Profile resolution; identity id -> role and organization.

from ..context import UserProfile
from ..providers import get_provider


def resolve_profile(identity_id: str) -> UserProfile | None:
    """
    Look up exactly one profile by identity id.

    Returns None when no profile row exists. Provider failures raise
    BackendError and are never reported as "not found".
    """
    row = get_provider().get_profile(identity_id)
    if row is None:
        return None
    return UserProfile.from_row(row)
