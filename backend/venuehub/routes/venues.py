# Overview: Flask API routes for venue operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify

from ..context import RequestContext
from ..decorators import require_auth, require_role
from ..errors import AppError, error_response, unexpected_response
from ..roles import DASHBOARD_ROLES
from ..services import venue_service
from ..validation import get_json_body


venues_bp = Blueprint("venues", __name__, url_prefix="/api/venues")


@venues_bp.get("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def list_venues_route(ctx: RequestContext):
    try:
        venues = venue_service.list_venues(ctx.org_id)
        return jsonify({"venues": venues}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list venues")
        return unexpected_response()


@venues_bp.post("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def create_venue_route(ctx: RequestContext):
    """
    Create a venue in the caller's organization.

    Request body:
    {
        "name": "Grand Hall",
        "location": "Main St 1",
        "capacity": 120,
        "pricePerHour": "85.00",
        "description": "...",           (optional)
        "amenities": "wifi, parking",   (optional, string or list)
        "status": "active"              (optional)
    }
    """
    try:
        venue = venue_service.create_venue(ctx.org_id, get_json_body())
        return jsonify({"venue": venue}), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create venue")
        return unexpected_response()


@venues_bp.get("/<venue_id>")
@require_auth
@require_role(*DASHBOARD_ROLES)
def get_venue_route(venue_id: str, ctx: RequestContext):
    try:
        venue = venue_service.get_venue(ctx.org_id, venue_id)
        return jsonify({"venue": venue}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load venue")
        return unexpected_response()


@venues_bp.patch("/<venue_id>")
@require_auth
@require_role(*DASHBOARD_ROLES)
def update_venue_route(venue_id: str, ctx: RequestContext):
    try:
        venue = venue_service.update_venue(ctx.org_id, venue_id, get_json_body())
        return jsonify({"venue": venue}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update venue")
        return unexpected_response()
