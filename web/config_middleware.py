"""Flask application configuration and middleware setup."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from flask import Flask, g, request
from flask_caching import Cache
from flask_wtf.csrf import CSRFProtect
from prometheus_client import Counter, Histogram

from utils.admin import admin_allowlist

if TYPE_CHECKING:
    from config import Config

# Global instances
cache = Cache()
csrf = CSRFProtect()

HISTORY_CACHE_KEYS = ("raffle_history", "multi_winner_stats")

# Prometheus metrics
REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "Total number of 5xx responses",
    ["method", "path"],
)


def configure_app(app: Flask, config: Config, testing: bool = False) -> None:
    """Configure Flask application settings.

    Args:
        app: Flask application instance
        config: Application configuration
        testing: Whether running in testing mode
    """
    app.config.update(
        SECRET_KEY=config.secret_key,
        SEND_FILE_MAX_AGE_DEFAULT=3600,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=(config.environment != 'development' and not testing),
        SESSION_COOKIE_SAMESITE='Lax',
        DATABASE_PATH=config.database_path,
        APP_URL=config.app_url,
        SLOW_REQUEST_THRESHOLD=config.slow_request_threshold,
        TESTING=testing,
        WTF_CSRF_ENABLED=not testing,
        WTF_CSRF_TIME_LIMIT=None,
        CACHE_TYPE="SimpleCache",
        CACHE_DEFAULT_TIMEOUT=config.cache_ttl_history,
    )

    # Warn if insecure defaults detected
    if config.environment == 'production':
        if config.secret_key.startswith("development_secret_key"):
            app.logger.warning("SECRET_KEY is not set properly")
        if not admin_allowlist():
            app.logger.warning("ADMIN_EMAILS is empty; nobody can manage raffles")


def setup_extensions(app: Flask) -> None:
    """Setup Flask extensions.

    Args:
        app: Flask application instance
    """
    cache.init_app(app)
    csrf.init_app(app)


def invalidate_history_cache() -> None:
    """Drop cached history pages after raffles, prizes, participants or winners change."""
    cache.delete_many(*HISTORY_CACHE_KEYS)


def setup_security_headers(app: Flask) -> None:
    """Setup security headers middleware.

    Args:
        app: Flask application instance
    """
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        csp = (
            "default-src 'self'; "
            "img-src 'self' data: blob:; "
            "connect-src 'self' ws: wss:; "
            "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "script-src 'self' 'unsafe-inline' https://cdn.socket.io https://cdn.jsdelivr.net"
        )
        if not response.headers.get('Content-Security-Policy'):
            response.headers['Content-Security-Policy'] = csp

        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'same-origin')
        response.headers.setdefault('Permissions-Policy', "camera=(), microphone=(), geolocation=()")
        return response


def setup_metrics(app: Flask) -> None:
    """Setup Prometheus metrics and slow request logging.

    Args:
        app: Flask application instance
    """
    @app.before_request
    def before_metrics():
        """Store request start time."""
        g._metrics_start = time.perf_counter()

    @app.after_request
    def after_metrics(response):
        """Record request metrics."""
        start = g.pop('_metrics_start', None)
        path = getattr(request.url_rule, 'rule', request.path)
        if start is not None:
            duration = time.perf_counter() - start
            REQUEST_LATENCY.labels(method=request.method, path=path).observe(duration)
            response.headers['X-Response-Time'] = f"{duration:.3f}s"
            if duration > app.config.get("SLOW_REQUEST_THRESHOLD", 1.0):
                app.logger.warning(f"Slow request: {request.method} {request.path} took {duration:.2f}s")

        if response.status_code >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path).inc()
        return response
