"""
Centralized Configuration Management for transferobject

This module provides the configuration system using Pydantic for validation
and type safety. Environment variables use the TRANSFEROBJECT_ prefix.
"""

import logging
from typing import Any, Literal, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from transferobject.exceptions import ConfigurationError


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        'WARNING',
        description="Logging level"
    )
    log_format: Literal['json', 'human'] = Field(
        'human',
        description="Log output format"
    )
    log_output: str = Field(
        'stderr',
        description="Log output destination (stdout, stderr, or file path)"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = ConfigDict(env_prefix='TRANSFEROBJECT_')


class SerializationConfig(BaseSettings):
    """JSON encoding options used by Record.serialize."""

    ensure_ascii: bool = Field(
        False,
        description="Escape non-ASCII characters as \\uXXXX"
    )
    escape_slashes: bool = Field(
        False,
        description="Escape forward slashes as \\/"
    )
    indent: Optional[int] = Field(
        None,
        ge=0,
        le=16,
        description="Indentation for pretty output, None for compact"
    )

    model_config = ConfigDict(env_prefix='TRANSFEROBJECT_JSON_')


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    serialization: SerializationConfig = Field(default_factory=SerializationConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()

    def validate_configuration(self) -> list[str]:
        """Validate configuration and return any warnings."""
        warnings = []

        if self.serialization.indent is not None and self.serialization.escape_slashes:
            warnings.append("Pretty-printed output with escaped slashes is not round-trip identical to compact output")

        if self.logging.log_level == 'DEBUG' and self.logging.log_format == 'human':
            warnings.append("DEBUG logging traces every marshalled record")

        return warnings

    model_config = ConfigDict(
        env_prefix='TRANSFEROBJECT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern)."""
    global _settings

    if _settings is None:
        try:
            _settings = Settings()
        except ValueError as e:
            raise ConfigurationError(f"Invalid transferobject configuration: {e}") from e

        warnings = _settings.validate_configuration()
        if warnings:
            logger = logging.getLogger(__name__)
            for warning in warnings:
                logger.warning(f"Configuration warning: {warning}")

    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = None
    return get_settings()


def get_logging_config() -> LoggingConfig:
    """Get logging configuration."""
    return get_settings().logging


def get_serialization_config() -> SerializationConfig:
    """Get serialization configuration."""
    return get_settings().serialization
