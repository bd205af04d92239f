"""
Centralized logger configuration for ordergate.

All components log through get_logger(), which returns a standard library
logger under the 'ordergate' namespace unless a custom logger was installed.

Usage:
    from ordergate.core.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Message")

    # Route everything through structlog, loguru, ...
    from ordergate.core.logger import set_logger
    set_logger(structlog.get_logger())
"""

import logging
from typing import Any

# Global logger override - None means standard logging
_custom_logger: Any = None


class NullLogger:  # pragma: no cover
    """A logger that does nothing (for when logging is disabled)."""

    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass
    def error(self, *args, **kwargs): pass
    def exception(self, *args, **kwargs): pass
    def critical(self, *args, **kwargs): pass
    def log(self, *args, **kwargs): pass


def set_logger(logger: Any) -> None:
    """
    Set a custom logger for all ordergate components.

    Args:
        logger: A logger instance supporting debug/info/warning/error/exception.
                Pass None to go back to standard logging.
    """
    global _custom_logger
    _custom_logger = logger


def get_logger(name: str = "ordergate") -> Any:
    """
    Get a logger instance.

    Returns the logger installed with set_logger() if any, otherwise a
    standard Python logger with the given name.
    """
    if _custom_logger is not None:
        return _custom_logger

    logger = logging.getLogger(name)

    # Avoid "No handler found" warnings for library users
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def configure_default_logging(  # pragma: no cover
    level: int = logging.INFO,
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """
    Configure basic console logging for ordergate.

    Args:
        level: Logging level (default: INFO)
        format_string: Log message format
    """
    logging.basicConfig(level=level, format=format_string)
    logging.getLogger("ordergate").setLevel(level)
