"""
transferobject Configuration Module
"""

from .logging_config import configure_from_settings, configure_logging
from .settings import (
    LoggingConfig,
    SerializationConfig,
    Settings,
    get_serialization_config,
    get_settings,
    reload_settings,
)

__all__ = [
    'LoggingConfig',
    'SerializationConfig',
    'Settings',
    'configure_from_settings',
    'configure_logging',
    'get_serialization_config',
    'get_settings',
    'reload_settings',
]
