"""Global logging configuration for tailwind-assist."""

import logging
import os
import sys

PACKAGE_LOGGER = "tailwind_assist"
LOG_LEVEL_ENV = "TAILWIND_ASSIST_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _parse_level(level: str | None) -> int:
    numeric_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), None)
    if not isinstance(numeric_level, int):
        return getattr(logging, DEFAULT_LOG_LEVEL)
    return numeric_level


def setup_logger(level: str | None = None) -> logging.Logger:
    """
    Configure the package logger that every module logger reports through.

    Records go to stderr so command output on stdout stays clean. The level
    comes from ``level``, then TAILWIND_ASSIST_LOG_LEVEL, then WARNING; an
    unknown level name falls back to WARNING.

    Args:
        level: Optional log level override

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        # Hosts that configure the root logger would otherwise print twice
        logger.propagate = False

    logger.setLevel(_parse_level(level or os.getenv(LOG_LEVEL_ENV)))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger under the package logger, typically ``get_logger(__name__)``."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


default_logger = setup_logger()
