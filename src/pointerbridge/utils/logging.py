"""Logging setup for pointerbridge and the uvicorn server it runs under.

Application and server messages share one set of handlers, so a
``serve`` process writes a single stream (and optionally one file).
uvicorn's per-request access log is held at ``access_level`` because
the request middleware already logs every call with its client address.
"""

from __future__ import annotations

import logging
import sys

from pointerbridge.config.settings import LoggingConfig

APP_LOGGER = "pointerbridge"
SERVER_LOGGER = "uvicorn"
ACCESS_LOGGER = "uvicorn.access"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the 'pointerbridge' and 'uvicorn' loggers.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    for handler in handlers:
        handler.setFormatter(formatter)

    for name in (APP_LOGGER, SERVER_LOGGER):
        logger = logging.getLogger(name)
        # Repeated setup replaces handlers instead of stacking them
        _reset(logger)
        logger.setLevel(_level(config.level))
        logger.propagate = False
        for handler in handlers:
            logger.addHandler(handler)

    access = logging.getLogger(ACCESS_LOGGER)
    _reset(access)
    access.setLevel(_level(config.access_level))
    access.propagate = True

    logging.getLogger(APP_LOGGER).info("Logging initialized at %s level", config.level)
