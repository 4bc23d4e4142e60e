"""
Log output for orbit-capture runs.

Every module logs through logging.getLogger(__name__), so all records land under
the "capture_core" logger configured here. Per-frame events (spawns, captures,
releases, collisions) are DEBUG; world generation and preset loading are INFO.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "capture_core"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route package log records to stdout and, optionally, to log_file.

    level may be a number or a name such as "DEBUG". Calling this again replaces
    the handlers installed by the previous call.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to stdout%s at %s", f" and {log_file}" if log_file else "",
                 logging.getLevelName(level))
    return logger
