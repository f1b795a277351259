"""Logging configuration"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "modeled"


def setup_logger(
    name: str = LOGGER_NAME,
    log_level: str = "INFO",
    log_file: Optional[str] = "logs/app.log"
) -> logging.Logger:
    """Setup and configure the service logger.

    Console output is capped at INFO; the file handler (if any) receives
    everything down to DEBUG.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Re-running setup must not stack handlers
    logger.handlers = []

    formatter = logging.Formatter(
        '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get the logger instance"""
    return logging.getLogger(name)
