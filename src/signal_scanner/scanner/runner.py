"""Headless scanner runner — scheduled cycles without the HTTP API."""

from __future__ import annotations

import argparse
import asyncio

from signal_scanner.config.loader import load_config
from signal_scanner.config.schema import AppConfig
from signal_scanner.logging import get_logger, setup_logging
from signal_scanner.services import build_services

log = get_logger("scanner")


async def run(config: AppConfig, once: bool = False) -> None:
    """Run one cycle (``once``) or the scheduler until cancelled."""
    services = build_services(config)
    try:
        if once:
            accepted = await services.scanner.run_cycle()
            log.info("single_cycle_done", accepted=accepted, live=len(services.store))
            return
        services.scheduler.start()
        await asyncio.Event().wait()
    finally:
        await services.aclose()


def main(config_path: str | None = None, once: bool = False) -> None:
    """Entry point — load config, set up logging, run the async loop."""
    config = load_config(config_path)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    try:
        asyncio.run(run(config, once=once))
    except KeyboardInterrupt:
        log.info("scanner_interrupted")


def cli() -> None:
    parser = argparse.ArgumentParser(description="Market signal scanner")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--once", action="store_true", help="Run a single scan cycle and exit")
    args = parser.parse_args()
    main(config_path=args.config, once=args.once)
