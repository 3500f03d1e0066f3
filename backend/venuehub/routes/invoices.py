# Overview: Flask API routes for invoice operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify

from ..context import RequestContext
from ..decorators import require_auth, require_role
from ..errors import AppError, error_response, unexpected_response
from ..roles import DASHBOARD_ROLES
from ..services import invoice_service
from ..validation import get_json_body


invoices_bp = Blueprint("invoices", __name__, url_prefix="/api/invoices")


@invoices_bp.get("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def list_invoices_route(ctx: RequestContext):
    try:
        invoices = invoice_service.list_invoices(ctx.org_id)
        return jsonify({"invoices": invoices}), 200
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list invoices")
        return unexpected_response()


@invoices_bp.post("")
@require_auth
@require_role(*DASHBOARD_ROLES)
def create_invoice_route(ctx: RequestContext):
    """
    Issue an invoice for a booking.

    Request body: {"bookingId": "...", "amount": "150.50", "dueDate": "2026-12-01", "paymentId": "..." (optional), "notes": "..."}
    """
    try:
        invoice = invoice_service.create_invoice(ctx.org_id, get_json_body())
        return jsonify({"invoice": invoice}), 201
    except AppError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create invoice")
        return unexpected_response()
