#!/usr/bin/env python3
"""
Entry point for the SKADAM café backend
Loads .env, configures logging, builds the container and serves the API
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from skadam.infrastructure.configuration.config import get_config  # noqa: E402
from skadam.infrastructure.container.dependency_injection import DependencyContainer  # noqa: E402
from skadam.infrastructure.logging.logging_config import (  # noqa: E402
    LoggingConfigOptions,
    setup_logging,
)
from skadam.presentation.api.app import create_app  # noqa: E402


def main() -> int:
    """Main entry point"""
    config = get_config()
    setup_logging(
        LoggingConfigOptions(
            log_level=config.log_level,
            log_dir=config.log_dir,
            colored_console=config.environment != "production",
        )
    )
    logger = logging.getLogger(__name__)
    logger.info("🚀 Starting SKADAM café backend (%s)", config.environment)
    logger.info("  💾 Storage backend: %s", config.storage_backend)
    logger.info("  📨 Telegram notifications: %s", "on" if config.telegram_enabled else "off")

    try:
        container = DependencyContainer(config)
        app = create_app(container)
        uvicorn.run(app, host=config.api_host, port=config.api_port, log_level="info")
    except KeyboardInterrupt:
        logger.info("🛑 Stopped by user")
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.critical("💥 Fatal error: %s", e, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
