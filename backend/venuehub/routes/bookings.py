# Overview: Flask API routes for booking operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify

from ..context import RequestContext
from ..decorators import require_auth, require_role
from ..errors import AppError, error_response, unexpected_response
from ..roles import DASHBOARD_ROLES
from ..services import booking_service
from ..validation import get_json_body


bookings_bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


@bookings_bp.get("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def list_bookings_route(ctx: RequestContext):
    """Bookings of the caller's organization with venue and payment summaries, latest date first."""
    try:
        bookings = booking_service.list_bookings(ctx.org_id)
        return jsonify({"bookings": bookings}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list bookings")
        return unexpected_response()


@bookings_bp.post("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def create_booking_route(ctx: RequestContext):
    """
    Create a booking for one of the caller's venues.

    Request body:
    {
        "venueId": "...",
        "customerName": "Ada Lovelace",
        "customerEmail": "ada@example.com",
        "customerPhone": "+44 ...",      (optional)
        "bookingDate": "2026-11-02",
        "startTime": "18:00",
        "endTime": "22:00",
        "totalPrice": "340.00",          (optional, defaults to hours x venue rate)
        "status": "pending",             (optional)
        "notes": "..."                   (optional)
    }
    """
    try:
        booking = booking_service.create_booking(ctx.org_id, get_json_body())
        return jsonify({"booking": booking}), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create booking")
        return unexpected_response()


@bookings_bp.patch("/<booking_id>")
@require_auth
@require_role(*DASHBOARD_ROLES)
def update_booking_route(booking_id: str, ctx: RequestContext):
    """Change booking status: {"status": "confirmed" | "cancelled" | "pending"}."""
    try:
        booking = booking_service.update_booking_status(ctx.org_id, booking_id, get_json_body())
        return jsonify({"booking": booking}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update booking")
        return unexpected_response()
