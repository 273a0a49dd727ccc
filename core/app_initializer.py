"""Application initialization orchestrator."""

from __future__ import annotations

import os
from contextlib import suppress
from typing import Optional

from flask import Flask

from config import Config, load_config
from core.logger import get_logger
from database import close_db_pool, init_db_pool, run_migrations
from services.async_runner import (
    run_coroutine_sync,
    start_background_loop,
    stop_background_loop,
)
from utils.performance import PerformanceMonitor

logger = get_logger(__name__)


class ApplicationInitializer:
    """Orchestrates application initialization and lifecycle."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or load_config()
        self.loop = None
        self.db_pool = None
        self.app: Optional[Flask] = None
        self.monitor = PerformanceMonitor()

    def initialize(self) -> None:
        """Initialize all application components."""
        # Event loop owning the database pool
        self.loop = start_background_loop()
        logger.info("✅ Event loop started")

        run_coroutine_sync(self._init_database())

        self._init_web_app()

    def run(self) -> None:
        """Run the web server until interrupted."""
        from web.realtime import socketio

        # Bind to PORT env var if present (Render/Heroku)
        effective_port = int(os.getenv("PORT", str(self.config.web_port)))
        effective_host = "0.0.0.0" if os.getenv("PORT") else self.config.web_host

        logger.info(f"🚀 Web server starting on http://{effective_host}:{effective_port}")
        logger.info(f"🔗 Admin panel: http://{effective_host}:{effective_port}/admin")
        try:
            socketio.run(
                self.app,
                host=effective_host,
                port=effective_port,
                debug=self.config.debug,
                use_reloader=False,
                allow_unsafe_werkzeug=self.config.environment == "development",
            )
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        """Cleanup resources."""
        with suppress(RuntimeError):
            run_coroutine_sync(close_db_pool(), timeout=10)
        stop_background_loop()
        logger.info("Resources released")

    async def _init_database(self) -> None:
        """Initialize database pool and run migrations."""
        self.db_pool = await init_db_pool(
            database_path=self.config.database_path,
            pool_size=self.config.db_pool_size,
            busy_timeout_ms=self.config.db_busy_timeout,
        )
        await run_migrations(self.db_pool)
        self.monitor.record_db_pool(self.db_pool.pool_size)
        logger.info("✅ Database initialized")

    def _init_web_app(self) -> None:
        """Create the Flask application."""
        from web import create_app

        self.app = create_app(self.config)
        logger.info("✅ Web application created")
