"""
Logging Configuration for transferobject
Provides structured (JSON) and human-readable output for the package loggers.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging import LogRecord
from typing import Optional, Union

PACKAGE_LOGGER = 'transferobject'


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """

    def format(self, record: LogRecord) -> str:
        """
        Format log record as structured JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Add any extra fields from the record
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter with color coding.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: LogRecord) -> str:
        color = self.COLORS.get(record.levelname, '') if self.use_color else ''
        reset = self.RESET if self.use_color else ''

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]

        formatted = (
            f"{color}{timestamp} "
            f"[{record.levelname:8}] "
            f"{record.name} - "
            f"{record.getMessage()}"
            f"{reset}"
        )

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted


def configure_logging(
    level: Union[str, int] = "WARNING",
    format_type: str = "human",
    output: str = "stderr",
    logger_name: Optional[str] = PACKAGE_LOGGER
) -> logging.Logger:
    """
    Configure the package logger.

    Only the ``transferobject`` logger hierarchy is touched unless
    ``logger_name`` is None, in which case the root logger is configured.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ('json' or 'human')
        output: Output destination ('stdout', 'stderr', or file path)
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    if format_type == 'json':
        formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter(use_color=output in ('stdout', 'stderr'))

    if output == 'stdout':
        handler = logging.StreamHandler(sys.stdout)
    elif output == 'stderr':
        handler = logging.StreamHandler(sys.stderr)
    else:
        # Assume it's a file path
        handler = logging.FileHandler(output)

    handler.setFormatter(formatter)

    target = logging.getLogger(logger_name)
    target.setLevel(level)
    target.handlers = []
    target.addHandler(handler)

    logging.getLogger('transferobject.config.logging').info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={format_type}, output={output}"
    )
    return target


def configure_from_settings() -> logging.Logger:
    """Configure the package logger from LoggingConfig."""
    from transferobject.config.settings import get_logging_config

    config = get_logging_config()
    return configure_logging(
        level=config.log_level,
        format_type=config.log_format,
        output=config.log_output,
    )
