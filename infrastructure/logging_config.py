"""
Logging configuration for the reservation engine
Provides console output plus rotating main, error and engine log files
"""

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

from infrastructure.settings import AppSettings, get_settings

ENGINE_LOGGERS = (
    'ReservationService',
    'WaitlistService',
    'NotificationScheduler',
    'NotificationService',
    'StatsService',
    'RecordRepository',
    'SlotEvents',
    'EngineApplication',
    'ErrorHandler',
)

CATALOG_LOGGERS = (
    'UserManager',
    'RoomCatalog',
)


def setup_logging(settings: Optional[AppSettings] = None) -> str:
    """
    Set up logging with console and rotating file handlers.

    Production mode keeps the console and main log at WARNING and above while
    the dedicated engine log still records INFO so that reservation state
    transitions stay auditable. Returns the log directory in use.
    """
    settings = settings or get_settings()
    production_mode = settings.production_mode
    log_dir = settings.log_directory
    os.makedirs(log_dir, exist_ok=True)

    main_log_file = os.path.join(log_dir, 'roomqueue.log')
    error_log_file = os.path.join(log_dir, 'roomqueue_errors.log')
    engine_log_file = os.path.join(log_dir, 'reservation_engine.log')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING if production_mode else logging.DEBUG)
    root_logger.handlers = []

    # Detailed formatter with file, line, and function information
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    main_file_handler = logging.handlers.RotatingFileHandler(
        main_log_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    main_file_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    main_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        error_log_file,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_file_handler)

    engine_handler = logging.handlers.RotatingFileHandler(
        engine_log_file,
        maxBytes=20*1024*1024,  # 20MB
        backupCount=5,
        encoding='utf-8'
    )
    engine_handler.setLevel(logging.INFO if production_mode else logging.DEBUG)
    engine_handler.setFormatter(detailed_formatter)

    engine_level = logging.INFO if production_mode else logging.DEBUG
    for name in ENGINE_LOGGERS:
        logger = logging.getLogger(name)
        logger.addHandler(engine_handler)
        logger.setLevel(engine_level)

    for name in CATALOG_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING if production_mode else logging.DEBUG)

    root_logger.info("=" * 80)
    root_logger.info(f"roomqueue logging initialized - {datetime.now()}")
    root_logger.info(f"Production Mode: {'ON' if production_mode else 'OFF'}")
    root_logger.info(f"Main log: {main_log_file}")
    root_logger.info(f"Error log: {error_log_file}")
    root_logger.info(f"Engine log: {engine_log_file}")
    root_logger.info("=" * 80)
    return log_dir

