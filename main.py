"""Application entry point."""

from __future__ import annotations

import logging

from config import load_config
from core import setup_logger
from core.app_initializer import ApplicationInitializer

config = load_config()

# Setup logging
logger = setup_logger(
    level=logging.DEBUG if config.debug else logging.INFO,
    log_file=f"{config.log_folder}/app.log",
    colored=True,
)


def main() -> None:
    """Main application entry point."""
    app = ApplicationInitializer(config)
    app.initialize()
    app.run()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        raise SystemExit(1)
