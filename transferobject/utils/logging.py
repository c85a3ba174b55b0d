"""
Centralized logging utilities for transferobject

Provides a thin structured wrapper around the standard logger so call sites
can attach key=value data without building strings themselves.
"""

import logging
from typing import Optional


class TransferLogger:
    """Logger wrapper with structured keyword support."""

    def __init__(self, name: str, level: Optional[str] = None):
        """
        Initialize logger.

        Args:
            name: Logger name (usually module name)
            level: Optional log level override
        """
        self.logger = logging.getLogger(name)

        if level:
            self.logger.setLevel(getattr(logging, level.upper()))

    def debug(self, msg: str, **kwargs):
        """Debug log with optional structured data."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Info log with optional structured data."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Warning log with optional structured data."""
        self._log(logging.WARNING, msg, **kwargs)

    def _log(self, level: int, msg: str, **kwargs):
        if not self.logger.isEnabledFor(level):
            return

        if kwargs:
            # Format structured data as key=value pairs
            structured = ' '.join(f'{k}={v}' for k, v in kwargs.items())
            full_msg = f'{msg} | {structured}'
        else:
            full_msg = msg

        self.logger.log(level, full_msg, extra={'extra_fields': kwargs}, stacklevel=3)


def get_logger(name: str, level: Optional[str] = None) -> TransferLogger:
    """
    Get a standardized logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override

    Returns:
        TransferLogger instance
    """
    return TransferLogger(name, level)
