"""Logging utilities for hostaddr.

Usage:
    from hostaddr.utils.logger import logger
    logger.debug("message")

Log level and the optional log directory are controlled by environment variables:
    HOSTADDR_LOG=DEBUG
    HOSTADDR_LOG_DIR=~/.hostaddr/logs
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from hostaddr.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


@lru_cache(maxsize=None)
def get_logger() -> logging.Logger:
    """Returns a configured logger for hostaddr.

    Log level is set by HOSTADDR_LOG (default WARNING). Records also go to
    hostaddr.log when HOSTADDR_LOG_DIR is set. Root handlers are left to the
    embedding application.
    """
    settings = get_settings().logging

    log_level = getattr(logging, settings.log.strip().upper(), logging.WARNING)

    logger = logging.getLogger("hostaddr")
    logger.setLevel(log_level)
    logger.addHandler(logging.NullHandler())

    if settings.log_dir:
        try:
            log_dir = Path(settings.log_dir).expanduser()
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / "hostaddr.log")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning("Cannot log to %s: %s", settings.log_dir, e)

    return logger


logger = get_logger()
