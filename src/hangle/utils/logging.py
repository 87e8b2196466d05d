"""Logging setup utilities for hangle.

Configures the ``hangle`` logger tree from the logging settings and
quiets the HTTP libraries, which would otherwise log every long-poll
request.
"""

from __future__ import annotations

import logging
import sys

from hangle.config.settings import LoggingConfig

# Loggers that report each request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the hangle application.

    Sets up the ``hangle`` logger with the configured level and format,
    a stderr handler and an optional file handler. Unless running at
    DEBUG level, per-request logging from httpx and uvicorn is raised
    to WARNING.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    level = getattr(logging, config.level.upper(), logging.INFO)
    package_logger = logging.getLogger("hangle")
    package_logger.setLevel(level)

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.debug("Logging initialized at %s level", config.level)
