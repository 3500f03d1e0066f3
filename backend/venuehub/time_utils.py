from __future__ import annotations

import time as _time
from datetime import date, datetime, time, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_millis() -> int:
    return int(_time.time() * 1000)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse "YYYY-MM-DD". A full ISO datetime is accepted and truncated to its date.

    - None / "" -> None
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    if "T" in s:
        s = s.split("T", 1)[0]
    return date.fromisoformat(s)


def parse_iso_time(value: Optional[str]) -> Optional[time]:
    """Parse "HH:MM" or "HH:MM:SS" (wall-clock, no timezone)."""
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    return time.fromisoformat(s).replace(tzinfo=None)


def iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def iso_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value is not None else None


def minutes_between(start: time, end: time) -> int:
    return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)


def as_naive_utc(dt: datetime) -> datetime:
    """Drivers may hand back aware datetimes for timezone=True columns; compare in naive UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
