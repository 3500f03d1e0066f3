from __future__ import annotations

from flask import current_app

from ..errors import NotFound
from ..providers import get_provider
from ..validation import parse_text, require_fields


def list_organizations() -> list[dict]:
    return get_provider().list_organizations()


def get_organization(organization_id) -> dict:
    org = get_provider().get_organization(str(organization_id)) if organization_id else None
    if org is None:
        raise NotFound("Organization not found")
    return org


def create_organization(name) -> dict:
    require_fields({"name": name})
    org = get_provider().create_organization({"name": parse_text(name, "name")})
    current_app.logger.info("Created organization %s (%s)", org["id"], org["name"])
    return org
