# Overview: Flask API routes for payment operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify

from ..context import RequestContext
from ..decorators import require_auth, require_role
from ..errors import AppError, error_response, unexpected_response
from ..roles import DASHBOARD_ROLES
from ..services import payment_service
from ..validation import get_json_body


payments_bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@payments_bp.get("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def list_payments_route(ctx: RequestContext):
    try:
        payments = payment_service.list_payments(ctx.org_id)
        return jsonify({"payments": payments}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list payments")
        return unexpected_response()


@payments_bp.post("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def create_payment_route(ctx: RequestContext):
    """
    Record a payment against a booking.

    Request body:
    {
        "bookingId": "...",
        "amount": "120.00",
        "paymentMethod": "card",   (cash, card, bank_transfer, check, other)
        "status": "paid"           (optional, defaults to pending)
    }

    The transaction id (TXN-...) is generated server-side.
    """
    try:
        payment = payment_service.create_payment(ctx.org_id, get_json_body())
        return jsonify({"payment": payment}), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create payment")
        return unexpected_response()
