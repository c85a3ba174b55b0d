import logging
from os import environ

logger = logging.getLogger('transferobject')
logger.addHandler(logging.NullHandler())

# Set up logging if TRANSFEROBJECT_LOG_LEVEL is defined
if 'TRANSFEROBJECT_LOG_LEVEL' in environ:
    from transferobject.config.logging_config import configure_from_settings
    configure_from_settings()
    logger.info('logging initiated')

from transferobject.exceptions import (  # noqa: E402
    InvalidArrayElementError,
    MarshallingError,
    ParseError,
    SchemaDefinitionError,
    SerializationError,
    TransferObjectError,
    UninitializedFieldError,
    UnknownFieldError,
)
from transferobject.representations import DeclaredType, Record, Schema, field  # noqa: E402
from transferobject.marshalling import Marshaller, marshal  # noqa: E402

# Version info
__version__ = '1.0.0'

__all__ = [
    'DeclaredType',
    'InvalidArrayElementError',
    'MarshallingError',
    'Marshaller',
    'ParseError',
    'Record',
    'Schema',
    'SchemaDefinitionError',
    'SerializationError',
    'TransferObjectError',
    'UninitializedFieldError',
    'UnknownFieldError',
    'field',
    'marshal',
]
