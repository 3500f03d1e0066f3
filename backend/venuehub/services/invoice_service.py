from __future__ import annotations

from ..errors import NotFound, ValidationError
from ..providers import get_provider
from ..validation import parse_amount, parse_date, parse_text, pick, require_fields
from . import booking_service, reference_service


def list_invoices(org_id: str) -> list[dict]:
    return get_provider().list_records("invoices", org_id)


def _settling_payment(org_id: str, payment_id, booking_id: str) -> str:
    payment = get_provider().get_record("payments", org_id, str(payment_id))
    if payment is None:
        raise NotFound("Payment not found")
    if payment["booking_id"] != booking_id:
        raise ValidationError("Payment does not belong to this booking")
    return payment["id"]


def create_invoice(org_id: str, data: dict) -> dict:
    """New invoices always start as pending. paymentId optionally links the settling payment."""
    booking_id = pick(data, "bookingId", "booking_id")
    amount = pick(data, "amount")
    due_date = pick(data, "dueDate", "due_date")
    require_fields({"bookingId": booking_id, "amount": amount, "dueDate": due_date})

    values = {
        "organization_id": org_id,
        "amount": parse_amount(amount, "amount"),
        "due_date": parse_date(due_date, "dueDate"),
        "status": "pending",
        "notes": parse_text(pick(data, "notes"), "notes", max_length=5000),
    }
    booking = booking_service.get_booking(org_id, booking_id)
    values["booking_id"] = booking["id"]

    payment_id = pick(data, "paymentId", "payment_id")
    if payment_id:
        values["payment_id"] = _settling_payment(org_id, payment_id, booking["id"])

    values["invoice_number"] = reference_service.invoice_number()
    return get_provider().create_record("invoices", values)
