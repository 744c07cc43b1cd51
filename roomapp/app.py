#!/usr/bin/env python3
"""
Reservation engine entrypoint: configure logging, start the reminder
scheduler and wait for a shutdown signal.
"""
from tracking import t

import argparse
import logging
import signal
from typing import Optional, Sequence

from infrastructure.logging_config import setup_logging
from infrastructure.settings import get_settings
from roomapp.runtime import EngineApplication


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='roomapp', description='Room reservation engine')
    parser.add_argument(
        '--seed-rooms',
        action='store_true',
        help='write the default room set when the room catalog is empty',
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point used by both CLI script and module execution."""
    t('roomapp.app.main')

    args = _parse_args(argv)
    settings = get_settings()
    log_dir = setup_logging(settings)

    logger = logging.getLogger('Main')
    logger.info("=" * 50)
    logger.info("Room Reservation Engine")
    logger.info("Logs: %s", log_dir)
    logger.info("=" * 50)

    app = EngineApplication(settings, seed_rooms=args.seed_rooms)

    def signal_handler(signum, frame):
        t('roomapp.app.main.signal_handler')
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        app.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("Starting engine...")
        app.run_forever()
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error("Engine error: %s", exc, exc_info=True)
        raise
    finally:
        app.stop()


if __name__ == '__main__':
    main()
