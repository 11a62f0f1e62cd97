"""Console and file logging for the ``realmask`` logger namespace.

Library modules only call ``logging.getLogger(__name__)``; nothing is
printed until an application calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

__all__ = ["setup_logging", "LOG_FORMAT", "DATE_FORMAT"]


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Send ``realmask`` records to stdout and, optionally, to *log_file*.

    Calling it again replaces the handlers from the previous call.  Use
    ``logging.DEBUG`` to see operator short-circuits and node construction.

    Returns
    -------
    logging.Logger
        The ``realmask`` package logger.
    """
    logger = logging.getLogger("realmask")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level))
    if log_file:
        logger.addHandler(_handler(logging.FileHandler(log_file, mode="w", encoding="utf-8"), level))

    logger.debug("realmask logging at %s", logging.getLevelName(level))
    return logger
