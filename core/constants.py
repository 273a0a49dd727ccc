"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Database constants
class DatabaseDefaults:
    """Default database configuration."""
    POOL_SIZE = 10
    BUSY_TIMEOUT = 5000  # milliseconds


# Input limits
class InputLimits:
    """Length limits for user supplied text."""
    NAME_MAX_LENGTH = 255
    DESCRIPTION_MAX_LENGTH = 1000
    SIGN_IN_PASSWORD_MIN_LENGTH = 6
    SIGN_UP_PASSWORD_MIN_LENGTH = 8


# QR activation windows
class QRDefaults:
    """Allowed QR code validity windows."""
    MIN_DURATION_MINUTES = 15
    MAX_DURATION_MINUTES = 1440  # 24 hours
    DEFAULT_DURATION_MINUTES = 180


# Draw constants
class DrawDefaults:
    """Wheel seed and state limits."""
    SEED_RANGE = 1_000_000
    SEED_MODULUS = 2_147_483_647
    MAX_PRIZES_IN_STATE = 100


# Status enums
class RaffleStatus(str, Enum):
    """Raffle lifecycle status."""
    DRAFT = "draft"
    ACTIVE = "active"
    DRAWING = "drawing"
    COMPLETED = "completed"


class RaffleEvent(str, Enum):
    """Realtime draw lifecycle events."""
    DRAW_START = "DRAW_START"
    WHEEL_SEED = "WHEEL_SEED"
    WINNER_REVEALED = "WINNER_REVEALED"
    RAFFLE_ENDED = "RAFFLE_ENDED"


def raffle_channel(raffle_id: str) -> str:
    """Realtime channel carrying draw events for a raffle."""
    return f"raffle:{raffle_id}:draw"


# Route protection
class RoutePrefixes:
    """Path prefixes guarded by the session middleware."""
    PROTECTED = ("/admin", "/participant")
    ADMIN = "/admin"
    AUTH_PAGES = ("/login", "/signup")
