"""
Uvicorn server runner with configurable logging.

Usage:
    python run.py

Environment variables (set in .env file):
    TOKEN=... - Discord credential used for the refresh API (required)
    PORT=8080 - Set server port (default: 8080)
    HOST=0.0.0.0 - Set server host (default: 0.0.0.0)
    DEBUG=true - Enable debug logging
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from app.config import get_settings

logger = logging.getLogger("app.run")

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Load settings from .env file
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical(f"Error loading configuration: {e}")
        sys.exit(1)

    # Set log level based on DEBUG setting from .env
    log_level = "debug" if settings.debug else "info"

    logger.info(f"Starting {settings.app_name} server...")
    logger.info(f"Server is running on {settings.host}:{settings.port}")
    logger.info(f"Log Level: {log_level}")

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=log_level,
        access_log=True,
    )
