"""Display helpers for raffle pages."""

from __future__ import annotations

from utils.dates import DateLike, parse_iso

STATUS_VARIANTS = {
    "active": "default",
    "drawing": "destructive",
    "completed": "secondary",
}

STATUS_DESCRIPTIONS = {
    "draft": "This raffle is still being set up. Add prizes and activate when ready.",
    "active": "Participants can join this raffle via QR code.",
    "drawing": "Drawing in progress. The wheel is spinning!",
    "completed": "All prizes have been drawn.",
}


def format_date(value: DateLike, fmt: str = "short") -> str:
    """``"Dec 25, 2024"`` for short, ``"December 25, 2024, 10:30 AM"`` for long."""
    parsed = parse_iso(value)
    if parsed is None:
        return ""
    if fmt == "long":
        hour = parsed.hour % 12 or 12
        meridiem = "AM" if parsed.hour < 12 else "PM"
        return f"{parsed:%B} {parsed.day}, {parsed.year}, {hour}:{parsed.minute:02d} {meridiem}"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def get_status_variant(status: str) -> str:
    return STATUS_VARIANTS.get(status, "outline")


def get_status_description(status: str) -> str:
    return STATUS_DESCRIPTIONS.get(status, "")
