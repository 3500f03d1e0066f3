from __future__ import annotations

import re
from datetime import date, time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from flask import request

from venuehub.errors import ValidationError
from venuehub.time_utils import parse_iso_date, parse_iso_time


# Largest money value accepted: 9,999,999,999.99 (fits Numeric(12, 2))
MAX_AMOUNT = Decimal("9999999999.99")
CENTS = Decimal("0.01")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def get_json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def pick(data: dict, *keys: str) -> Any:
    """
    First present value among keys.

    Clients send camelCase (pricePerHour); snake_case (price_per_hour) is
    accepted as well so rows read from the API can be posted back.
    """
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(values: dict[str, Any]) -> None:
    """Raise one ValidationError naming every blank field."""
    missing = [name for name, value in values.items() if _is_blank(value)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def parse_amount(value: Any, field: str, *, allow_zero: bool = False) -> Decimal:
    """
    Parse a money amount from a number or numeric string ("150.50").

    Returns a Decimal rounded to cents. Booleans, non-finite values,
    negatives and (unless allow_zero) zero are rejected.
    """
    if isinstance(value, bool) or _is_blank(value):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")

    # Huge exponents ("1e30") overflow quantize, so bound the magnitude first
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"{field} exceeds maximum allowed value")

    amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field} must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field} exceeds maximum allowed value")
    return amount


def parse_int(value: Any, field: str, *, minimum: int | None = None) -> int:
    # Strict: rejects floats, decimals and scientific notation
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped or not re.fullmatch(r"-?\d+", stripped):
            raise ValidationError(f"{field} must be an integer")
        result = int(stripped)
    else:
        raise ValidationError(f"{field} must be an integer")

    if minimum is not None and result < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    return result


def parse_choice(value: Any, field: str, choices: Iterable[str], default: str | None = None) -> str:
    choices = tuple(choices)
    if _is_blank(value):
        if default is not None:
            return default
        raise ValidationError(f"{field} is required")
    if value not in choices:
        raise ValidationError(f"Invalid {field}. Must be one of: {', '.join(choices)}")
    return value


def parse_date(value: Any, field: str) -> date:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")
    return parsed


def parse_time(value: Any, field: str) -> time:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a time (HH:MM)")
    try:
        parsed = parse_iso_time(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{field} must be a time (HH:MM)")
    return parsed


def parse_email(value: Any, field: str = "email") -> str:
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        raise ValidationError(f"{field} must be a valid email address")
    return value.strip().lower()


def parse_text(value: Any, field: str, *, max_length: int = 255) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    text = value.strip()
    if len(text) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return text or None


def normalize_tags(value: Any, field: str = "amenities") -> str | None:
    """
    Amenities are stored as one comma-separated string.

    Accepts either that string or a list of tags. Tags are trimmed and blanks
    dropped: " wifi, ,parking " -> "wifi, parking".
    """
    if value is None:
        return None
    if isinstance(value, str):
        tags = value.split(",")
    elif isinstance(value, (list, tuple)) and all(isinstance(tag, str) for tag in value):
        tags = list(value)
    else:
        raise ValidationError(f"{field} must be a comma-separated string or a list of strings")
    cleaned = [tag.strip() for tag in tags if tag.strip()]
    return ", ".join(cleaned) or None
