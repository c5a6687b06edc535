"""Logging setup for the form engine app."""

import logging
import sys
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None):
    """Configure the root logger with a single stdout handler.

    Args:
        level: Log level name. Defaults to FORM_ENGINE_LOG_LEVEL or INFO.
    """
    log_level = (level or get_settings().log_level).upper()

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
