from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from ..errors import NotFound, ValidationError
from ..models.bookings import BOOKING_STATUSES
from ..providers import get_provider
from ..time_utils import minutes_between
from ..validation import (
    CENTS, parse_amount, parse_choice, parse_date, parse_email, parse_text, parse_time, pick,
    require_fields,
)


def list_bookings(org_id: str) -> list[dict]:
    return get_provider().list_records("bookings", org_id)


def get_booking(org_id: str, booking_id) -> dict:
    """
    Booking of the caller's organization.

    A booking id from another organization is reported as missing, never
    as forbidden, so its existence is not revealed.
    """
    if not booking_id:
        raise NotFound("Booking not found")
    booking = get_provider().get_record("bookings", org_id, str(booking_id))
    if booking is None:
        raise NotFound("Booking not found")
    return booking


def quote_total(price_per_hour, start_time, end_time) -> Decimal:
    hours = Decimal(minutes_between(start_time, end_time)) / Decimal(60)
    return (Decimal(str(price_per_hour)) * hours).quantize(CENTS, rounding=ROUND_HALF_UP)


def create_booking(org_id: str, data: dict) -> dict:
    venue_id = pick(data, "venueId", "venue_id")
    customer_name = pick(data, "customerName", "customer_name")
    customer_email = pick(data, "customerEmail", "customer_email")
    booking_date = pick(data, "bookingDate", "booking_date")
    start = pick(data, "startTime", "start_time")
    end = pick(data, "endTime", "end_time")
    require_fields({
        "venueId": venue_id,
        "customerName": customer_name,
        "customerEmail": customer_email,
        "bookingDate": booking_date,
        "startTime": start,
        "endTime": end,
    })

    start_time = parse_time(start, "startTime")
    end_time = parse_time(end, "endTime")
    if minutes_between(start_time, end_time) <= 0:
        raise ValidationError("endTime must be after startTime")

    venue = get_provider().get_record("venues", org_id, str(venue_id))
    if venue is None:
        raise NotFound("Venue not found")
    if venue.get("status") != "active":
        raise ValidationError("Venue is not available for booking")

    total = pick(data, "totalPrice", "total_price")
    if total is not None:
        total_price = parse_amount(total, "totalPrice", allow_zero=True)
    else:
        total_price = quote_total(venue.get("price_per_hour") or 0, start_time, end_time)

    values = {
        "organization_id": org_id,
        "venue_id": venue["id"],
        "customer_name": parse_text(customer_name, "customerName"),
        "customer_email": parse_email(customer_email, "customerEmail"),
        "customer_phone": parse_text(pick(data, "customerPhone", "customer_phone"), "customerPhone", max_length=64),
        "booking_date": parse_date(booking_date, "bookingDate"),
        "start_time": start_time,
        "end_time": end_time,
        "status": parse_choice(pick(data, "status"), "status", BOOKING_STATUSES, default="pending"),
        "total_price": total_price,
        "notes": parse_text(pick(data, "notes"), "notes", max_length=5000),
    }
    return get_provider().create_record("bookings", values)


def update_booking_status(org_id: str, booking_id: str, data: dict) -> dict:
    status = parse_choice(pick(data, "status"), "status", BOOKING_STATUSES)
    booking = get_provider().update_record("bookings", org_id, booking_id, {"status": status})
    if booking is None:
        raise NotFound("Booking not found")
    return booking
