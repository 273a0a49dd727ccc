"""Date and time helpers for QR code expiration handling.

Timestamps are stored as ISO 8601 strings in UTC so that they compare
correctly as plain strings inside SQL.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

DateLike = Union[str, datetime, None]

DURATION_OPTIONS: tuple[dict, ...] = (
    {"label": "1 hour", "minutes": 60},
    {"label": "2 hours", "minutes": 120},
    {"label": "3 hours", "minutes": 180},
    {"label": "4 hours", "minutes": 240},
)

DEFAULT_DURATION_MINUTES = 180


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def now_iso() -> str:
    return to_iso(utc_now())


def expires_in(minutes: int) -> str:
    """ISO timestamp ``minutes`` from now."""
    return to_iso(utc_now() + timedelta(minutes=minutes))


def parse_iso(value: DateLike) -> Optional[datetime]:
    """Parse an ISO timestamp; naive values are treated as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_expired(expires_at: DateLike, now: Optional[datetime] = None) -> bool:
    """True when the timestamp is missing or not in the future."""
    expiration = parse_iso(expires_at)
    if expiration is None:
        return True
    return expiration <= (now or utc_now())


@dataclass(frozen=True)
class TimeRemaining:
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    is_expired: bool


def get_time_remaining(expires_at: DateLike, now: Optional[datetime] = None) -> TimeRemaining:
    expiration = parse_iso(expires_at)
    if expiration is None:
        return TimeRemaining(0, 0, 0, 0, True)

    diff = (expiration - (now or utc_now())).total_seconds()
    if diff <= 0:
        return TimeRemaining(0, 0, 0, 0, True)

    total_seconds = int(diff)
    return TimeRemaining(
        hours=total_seconds // 3600,
        minutes=(total_seconds % 3600) // 60,
        seconds=total_seconds % 60,
        total_seconds=total_seconds,
        is_expired=False,
    )


def format_countdown(expires_at: DateLike, now: Optional[datetime] = None) -> str:
    """Human readable countdown such as ``"2h 30m"``, ``"3m 12s"`` or ``"Expired"``."""
    remaining = get_time_remaining(expires_at, now)
    if remaining.is_expired:
        return "Expired"

    parts = []
    if remaining.hours > 0:
        parts.append(f"{remaining.hours}h")
    if remaining.minutes > 0 or remaining.hours > 0:
        parts.append(f"{remaining.minutes}m")
    # Seconds only matter in the last five minutes
    if remaining.hours == 0 and remaining.minutes < 5:
        parts.append(f"{remaining.seconds}s")
    return " ".join(parts)


def format_expiration_time(expires_at: DateLike) -> str:
    """12-hour clock time, e.g. ``"3:30 PM"``."""
    expiration = parse_iso(expires_at)
    if expiration is None:
        return ""
    hour = expiration.hour % 12 or 12
    return f"{hour}:{expiration.minute:02d} {'AM' if expiration.hour < 12 else 'PM'}"
