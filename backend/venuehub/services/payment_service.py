from __future__ import annotations

from ..models.billing import PAYMENT_METHODS, PAYMENT_STATUSES
from ..providers import get_provider
from ..validation import parse_amount, parse_choice, pick, require_fields
from . import booking_service, reference_service


def list_payments(org_id: str) -> list[dict]:
    return get_provider().list_records("payments", org_id)


def create_payment(org_id: str, data: dict) -> dict:
    booking_id = pick(data, "bookingId", "booking_id")
    amount = pick(data, "amount")
    method = pick(data, "paymentMethod", "payment_method")
    require_fields({"bookingId": booking_id, "amount": amount, "paymentMethod": method})

    values = {
        "organization_id": org_id,
        "amount": parse_amount(amount, "amount"),
        "payment_method": parse_choice(method, "paymentMethod", PAYMENT_METHODS),
        "status": parse_choice(pick(data, "status"), "status", PAYMENT_STATUSES, default="pending"),
    }
    booking = booking_service.get_booking(org_id, booking_id)
    values["booking_id"] = booking["id"]
    values["transaction_id"] = reference_service.transaction_id()

    return get_provider().create_record("payments", values)
