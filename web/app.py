"""Flask application factory with caching and security defaults."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, redirect, render_template, request
from flask_login import current_user
from markupsafe import Markup
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from config import Config, load_config
from utils.dates import format_countdown, format_expiration_time
from utils.raffle import format_date, get_status_description, get_status_variant
from web.auth import init_login_manager
from web.config_middleware import (
    configure_app,
    setup_extensions,
    setup_security_headers,
    setup_metrics,
)
from web.middleware import init_auth_gate
from web.realtime import init_realtime
from web.routes import register_routes


def create_app(config: Optional[Config] = None, testing: bool = False) -> Flask:
    """Create and configure Flask application.

    Args:
        config: Application configuration
        testing: Whether running in testing mode

    Returns:
        Configured Flask application
    """
    config = config or load_config()
    app = Flask(__name__)

    # Configure application
    configure_app(app, config, testing)

    # Setup extensions
    setup_extensions(app)

    # Setup middleware
    setup_security_headers(app)
    setup_metrics(app)

    # Initialize authentication; the gate needs the login manager
    init_login_manager(app)
    init_auth_gate(app)

    # Realtime draw events
    init_realtime(app)

    # Register routes
    register_routes(app)

    # Setup additional handlers
    _setup_routes(app)
    _setup_template_helpers(app)
    _setup_error_handlers(app)

    return app


def _setup_routes(app: Flask) -> None:
    """Setup basic application routes.

    Args:
        app: Flask application instance
    """
    @app.route('/')
    def root():
        """Send visitors to the area that fits their role."""
        if not current_user.is_authenticated:
            return redirect('/login')
        if current_user.is_admin:
            return redirect('/admin')
        return redirect('/participant')

    @app.route('/metrics')
    def metrics():
        """Expose Prometheus metrics."""
        data = generate_latest()
        return data, 200, {'Content-Type': CONTENT_TYPE_LATEST}


def _setup_template_helpers(app: Flask) -> None:
    """Register Jinja filters used by the templates.

    Args:
        app: Flask application instance
    """
    # Raffle names are HTML-encoded when stored
    app.jinja_env.filters['encoded'] = Markup
    app.jinja_env.filters['format_date'] = format_date
    app.jinja_env.filters['countdown'] = format_countdown
    app.jinja_env.filters['expiration_time'] = format_expiration_time
    app.jinja_env.filters['status_variant'] = get_status_variant
    app.jinja_env.filters['status_description'] = get_status_description


def _wants_json() -> bool:
    return request.path.startswith('/api/')


def _setup_error_handlers(app: Flask) -> None:
    """Setup error handlers.

    Args:
        app: Flask application instance
    """
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        if _wants_json():
            return jsonify({"data": None, "error": "Not found"}), 404
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        app.logger.error(f"Internal server error: {error}")
        if _wants_json():
            return jsonify({"data": None, "error": "Internal server error"}), 500
        return render_template('500.html'), 500
