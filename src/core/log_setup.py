"""Logging configuration for the package. Hosts call `setup_logging()` once at startup."""

import logging
import sys
from typing import Optional

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "src"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stdout handler to the package logger. Calling it again only updates the level."""
    level_name = (level or get_settings().log_level).upper()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level_name)

    if not any(
        getattr(handler, "_dama_handler", False) for handler in package_logger.handlers
    ):
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._dama_handler = True  # type: ignore[attr-defined]
        package_logger.addHandler(console_handler)

    return package_logger
