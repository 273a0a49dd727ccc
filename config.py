"""Application configuration module.

Reads settings from environment variables with sane defaults for a single
meetup-sized deployment (a few hundred participants per raffle).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.constants import DatabaseDefaults

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


@dataclass(frozen=True)
class Config:
    environment: str
    debug: bool
    web_host: str
    web_port: int
    secret_key: str
    app_url: str
    database_path: str
    log_folder: str
    db_pool_size: int
    db_busy_timeout: int
    cache_ttl_history: int
    slow_request_threshold: float


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values
    """
    return Config(
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        web_host=_get_str("WEB_HOST", "0.0.0.0"),
        web_port=_get_int("WEB_PORT", 5000),
        secret_key=_get_str(
            "SECRET_KEY",
            "development_secret_key_must_be_changed_in_production"
        ),
        app_url=_get_str("APP_URL", "http://localhost:5000").rstrip("/"),
        database_path=_get_str("DATABASE_PATH", "data/servus_raffle.sqlite"),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        db_pool_size=_get_int("DB_POOL_SIZE", DatabaseDefaults.POOL_SIZE),
        db_busy_timeout=_get_int("DB_BUSY_TIMEOUT", DatabaseDefaults.BUSY_TIMEOUT),
        cache_ttl_history=_get_int("CACHE_TTL_HISTORY", 60),
        slow_request_threshold=float(_get_int("SLOW_REQUEST_MS", 1000)) / 1000,
    )
