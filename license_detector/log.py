"""Utilities for package-wide logging configuration.

Installs a NullHandler on the package logger so that importing
license_detector never emits "no handler" warnings, and exposes a helper
for applications that want to see detection diagnostics.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "get_logger",
]

PACKAGE_LOGGER_NAME = "license_detector"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger scoped to license_detector.

    Args:
        name: Fully qualified logger name. Defaults to the package logger.

    Returns:
        Logger instance for the requested name.
    """
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Optional[IO[str]] = None,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once replaces the handler installed by the
    previous call instead of stacking another one.

    Args:
        level: Logging level or level name. Defaults to logging.INFO.
        stream: Target stream; defaults to sys.stderr.
        fmt: Log format string.
        datefmt: Date format string for the handler.

    Returns:
        The configured package logger.
    """
    logger = get_logger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_license_detector_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT, datefmt=datefmt))
    handler._license_detector_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
