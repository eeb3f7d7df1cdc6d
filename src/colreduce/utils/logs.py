"""Centralized logging configuration for ColReduce.

All modules get their logger through :func:`get_logger`,
loggers are children of the ``colreduce`` logger which
owns the only handler.
"""

import logging
import sys

ROOT_LOGGER_NAME = "colreduce"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.WARNING,
    format_string: str | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """Set up the ``colreduce`` logger with a single handler.

    Only the first call has effect, until :func:`reset_logging`.

    :param level: Logging level, the library only warns by default.
    :param format_string: Custom format string.
    :param handler: Custom handler, defaults to a stream on stderr
                    so that it doesn't mix with printed results.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so that pytest caplog can capture the records.
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger inheriting the ``colreduce`` configuration.

    :param name: Logger name, typically ``__name__`` of the calling module.
    """
    setup_root_logger()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the log level for all ColReduce loggers."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def reset_logging() -> None:
    """Forget the logging configuration, mainly for testing."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
