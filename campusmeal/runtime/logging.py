"""Centralized logging configuration for campusmeal.

Usage:
    from campusmeal.runtime import get_logger
    logger = get_logger(__name__)

    logger.info("Booking %s confirmed", booking_id)

Environment variables:
    CAMPUSMEAL_LOG_LEVEL: Level name (DEBUG, INFO, WARNING, ERROR) or number. Default: INFO
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "campusmeal"

_logging_configured = False

_LEVEL_ALIASES = {"WARN": logging.WARNING}


def _level_from_env(value: str) -> int:
    """Map CAMPUSMEAL_LOG_LEVEL (a level name or number) to a logging level."""
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    if value in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[value]
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def _formatter(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Configure the campusmeal logger namespace.

    Args:
        level: Log level to use. If None, reads from CAMPUSMEAL_LOG_LEVEL env var
               or uses DEFAULT_LOG_LEVEL.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = _level_from_env(os.environ.get("CAMPUSMEAL_LOG_LEVEL", ""))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(level))

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Module names already inside the package (``campusmeal.*``) are used as-is;
    anything else is nested under the ``campusmeal`` namespace.
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the log level at runtime.

    Args:
        level: New log level (e.g., logging.DEBUG)
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setFormatter(_formatter(level))
