"""Centralized logging configuration for enumerable.

All package loggers hang under ``enumerable``: resolution decisions are
logged at DEBUG by ``enumerable.derive``, guard refusals and missed deadlines
at WARNING by ``enumerable.guards``, and catalog builds at INFO by
``enumerable.dsl``. Records carry the thread name so messages from deadline
workers (``enumerable-deadline_0``, ...) can be told apart from the caller's.

The initial level comes from ``ENUMERABLE_LOG_LEVEL`` when set (``DEBUG``,
``warning``, ...), otherwise INFO.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "enumerable"

#: Environment variable naming the initial log level.
LOG_LEVEL_ENV = "ENUMERABLE_LOG_LEVEL"

DEFAULT_FORMAT = "%(asctime)s - %(name)s [%(threadName)s] - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def level_from_env(default: int = logging.INFO) -> int:
    """Return the level named by ``ENUMERABLE_LOG_LEVEL``, or `default`.

    Unknown names fall back to `default`.
    """
    name = os.getenv(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root enumerable logger with a single handler.

    Only the first call has an effect; later calls are ignored until
    `reset_logging()` is called.

    Args:
        level: Logging level (default: `level_from_env()`).
        format_string: Custom format string (default: `DEFAULT_FORMAT`).
        handler: Custom handler (optional, defaults to a stderr StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level_from_env() if level is None else level)
    root_logger.handlers.clear()

    # stdout is reserved for enumerated values printed by the CLI
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Let logs propagate to root logger so pytest can capture them
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the package's root configuration.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Configured logger instance.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)  # Inherit from parent
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all enumerable loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Log every resolution and enumeration step."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Back to INFO: catalog builds, refusals and missed deadlines only."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


# Initialize the root logger when the module is imported
setup_root_logger()
