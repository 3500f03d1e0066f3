from __future__ import annotations

from ..errors import NotFound, ValidationError
from ..models.venues import VENUE_STATUSES
from ..providers import get_provider
from ..validation import (
    normalize_tags, parse_amount, parse_choice, parse_int, parse_text, pick, require_fields,
)


def list_venues(org_id: str) -> list[dict]:
    return get_provider().list_records("venues", org_id)


def get_venue(org_id: str, venue_id: str) -> dict:
    venue = get_provider().get_record("venues", org_id, venue_id)
    if venue is None:
        raise NotFound("Venue not found")
    return venue


def create_venue(org_id: str, data: dict) -> dict:
    name = pick(data, "name")
    location = pick(data, "location")
    capacity = pick(data, "capacity")
    price = pick(data, "pricePerHour", "price_per_hour")
    require_fields({"name": name, "location": location, "capacity": capacity, "pricePerHour": price})

    values = {
        "organization_id": org_id,
        "name": parse_text(name, "name"),
        "location": parse_text(location, "location"),
        "capacity": parse_int(capacity, "capacity", minimum=1),
        "price_per_hour": parse_amount(price, "pricePerHour", allow_zero=True),
        "description": parse_text(pick(data, "description"), "description", max_length=5000),
        "amenities": normalize_tags(pick(data, "amenities")),
        "status": parse_choice(pick(data, "status"), "status", VENUE_STATUSES, default="active"),
    }
    return get_provider().create_record("venues", values)


def update_venue(org_id: str, venue_id: str, data: dict) -> dict:
    """Partial update; only the fields present in data change."""
    changes: dict = {}

    if pick(data, "name") is not None:
        changes["name"] = parse_text(data["name"], "name")
        if not changes["name"]:
            raise ValidationError("name cannot be blank")
    if pick(data, "location") is not None:
        changes["location"] = parse_text(data["location"], "location")
    if pick(data, "capacity") is not None:
        changes["capacity"] = parse_int(data["capacity"], "capacity", minimum=1)

    price = pick(data, "pricePerHour", "price_per_hour")
    if price is not None:
        changes["price_per_hour"] = parse_amount(price, "pricePerHour", allow_zero=True)

    if "description" in data:
        changes["description"] = parse_text(data["description"], "description", max_length=5000)
    if "amenities" in data:
        changes["amenities"] = normalize_tags(data["amenities"])
    if pick(data, "status") is not None:
        changes["status"] = parse_choice(data["status"], "status", VENUE_STATUSES)

    if not changes:
        raise ValidationError("No updatable fields provided")

    venue = get_provider().update_record("venues", org_id, venue_id, changes)
    if venue is None:
        raise NotFound("Venue not found")
    return venue
