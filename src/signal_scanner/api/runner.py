#!/usr/bin/env python3
"""FastAPI server runner — serves the API and runs the scanner in-process."""

import argparse

import structlog
import uvicorn

from signal_scanner.api.app import create_app
from signal_scanner.config.loader import load_config
from signal_scanner.logging.setup import setup_logging
from signal_scanner.services import build_services

logger = structlog.get_logger()


def main():
    """Run the FastAPI server."""
    parser = argparse.ArgumentParser(description="Signal scanner API server")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    app = create_app(build_services(config))

    logger.info("Starting FastAPI server", host=config.api.host, port=config.api.port)

    try:
        uvicorn.run(
            app,
            host=config.api.host,
            port=config.api.port,
            log_config=None  # Use our structlog setup
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()
