"""Logging configuration for viewport-layout.

Library modules log through ``logging.getLogger(__name__)`` and never install
handlers themselves. Applications (including the ``vplayout`` CLI) call
``setup_logging`` once to attach a stderr handler to the package logger.

Provides:
- Configurable log levels (WARNING, INFO, DEBUG)
- Colored output on terminals
- Timing logs for context switches and document restores
"""

import logging
import sys
import time
from contextlib import contextmanager
from functools import wraps
from typing import Callable


PACKAGE_LOGGER = "viewport_layout"

# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        # Work on a copy: other handlers may share the record
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure the package logger.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level)

    Returns:
        Configured package logger

    Examples:
        >>> logger = setup_logging(verbose=True)
        >>> logger.info("Switching context")
        2026-01-12 10:30:45 [INFO] viewport_layout: Switching context
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Remove existing handlers so repeated calls do not duplicate output
    logger.handlers.clear()

    if debug:
        logger.setLevel(logging.DEBUG)
        log_format = DEBUG_FORMAT
    elif verbose:
        logger.setLevel(logging.INFO)
        log_format = VERBOSE_FORMAT
    else:
        logger.setLevel(logging.WARNING)
        log_format = DEFAULT_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    # Use colored formatter if terminal supports it
    if sys.stderr.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name (default: the package logger)
    """
    return logging.getLogger(name)


@contextmanager
def log_timing(operation: str, logger: logging.Logger):
    """Context manager for logging operation timing.

    Args:
        operation: Operation description
        logger: Logger instance

    Examples:
        >>> with log_timing("Switch to landscape-lg-1920x1080", logger):
        ...     workspace.set_surface(rect)
        INFO: Switch to landscape-lg-1920x1080 completed in 0.41ms
    """
    start = time.perf_counter()
    logger.debug(f"Starting: {operation}")

    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"{operation} failed after {elapsed_ms:.2f}ms: {e}")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{operation} completed in {elapsed_ms:.2f}ms")


def log_performance(func: Callable) -> Callable:
    """Decorator for logging function performance at DEBUG level.

    Failures are logged with their elapsed time and re-raised.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()

        try:
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__qualname__} completed in {elapsed_ms:.2f}ms")
            return result
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"{func.__qualname__} failed after {elapsed_ms:.2f}ms: {e}")
            raise

    return wrapper
