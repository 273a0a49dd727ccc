"""Input validation helpers."""

import html
import re
import uuid

from core.constants import InputLimits

CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def is_valid_uuid(value) -> bool:
    """Accept canonical hyphenated UUID strings only."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def sanitize_input(value: str) -> str:
    """Trim, drop control characters and HTML-encode text before it is stored.

    Length limits are checked by the caller on the encoded result.
    """
    cleaned = CONTROL_CHARS_RE.sub("", value.strip())
    return html.escape(cleaned, quote=True)


def strip_markup(value: str, max_length: int = InputLimits.NAME_MAX_LENGTH) -> str:
    """Trim and remove angle brackets, for display names."""
    return re.sub(r"[<>]", "", value.strip())[:max_length]
