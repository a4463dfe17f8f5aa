"""CLI entrypoint for the event ingestion server."""

import logging
import os
import sys

import uvicorn

from event_ingestion.app import create_app
from event_ingestion.config import EventIngestionConfig


def setup_logging():
    """Setup logging configuration."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Main entrypoint for the server."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config = EventIngestionConfig.from_env()
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        sys.exit(1)

    app = create_app(config)

    logger.info(f"Event ingestion server running on {config.host}:{config.port}")
    try:
        # uvicorn exits the process if the app lifespan fails to start
        uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
